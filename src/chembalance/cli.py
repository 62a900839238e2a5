"""Command-line entrypoints for chembalance."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from contextlib import ExitStack, closing
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Tuple

import typer

from chembalance.catalog import default_catalog
from chembalance.constants import GAME_COEFFICIENT_RANGE
from chembalance.equation import Equation
from chembalance.exceptions import ChallengeSelectionError
from chembalance.game import ChallengeGenerator, GameModel, GameState
from chembalance.persistence import sqlite_store
from chembalance.settings import GameSettings, load_settings

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Balance chemical equations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_coefficients(
    text: str, equation: Equation, coefficient_range: Optional[Tuple[int, int]] = None
) -> List[int]:
    try:
        values = [int(part) for part in text.replace(",", " ").split()]
    except ValueError:
        raise typer.BadParameter(f"Coefficients must be integers: {text!r}") from None
    if len(values) != len(equation.terms):
        raise typer.BadParameter(
            f"Expected {len(equation.terms)} coefficients for {equation.name}, got {len(values)}"
        )
    if any(value < 0 for value in values):
        raise typer.BadParameter("Coefficients must be non-negative")
    if coefficient_range is not None:
        low, high = coefficient_range
        if any(not low <= value <= high for value in values):
            raise typer.BadParameter(f"Coefficients must be between {low} and {high}")
    return values


def _apply_coefficients(equation: Equation, values: List[int]) -> None:
    for term, value in zip(equation.terms, values, strict=True):
        term.user_coefficient = value


def _equation_payload(equation: Equation) -> Dict[str, Any]:
    return {
        "name": equation.name,
        "kind": equation.kind.value,
        "coefficients": [term.user_coefficient for term in equation.terms],
        "answer": equation.get_coefficients_string(),
        "balanced": equation.balanced,
        "balanced_and_simplified": equation.balanced_and_simplified,
        "atom_counts": [
            {"element": c.element, "reactants": c.reactants_count, "products": c.products_count}
            for c in equation.get_atom_counts()
        ],
    }


def _prompt_skeleton(equation: Equation) -> str:
    reactants = " + ".join(f"? {t.molecule.symbol}" for t in equation.reactants)
    products = " + ".join(f"? {t.molecule.symbol}" for t in equation.products)
    return f"{reactants} → {products}"


def _echo_atom_counts(equation: Equation) -> None:
    for count in equation.get_atom_counts():
        marker = "" if count.is_balanced() else "  <-- unbalanced"
        typer.echo(f"  {count.element:>2}: {count.reactants_count} | {count.products_count}{marker}")


@app.command("list")
def list_equations(
    level: Annotated[
        Optional[int], typer.Option(help="Only list equations eligible at this game level (starting at 1).")
    ] = None,
) -> None:
    """List the equation catalog."""
    catalog = default_catalog()
    if level is None:
        entries = list(catalog)
    else:
        try:
            entries = ChallengeGenerator(catalog).eligible(level - 1)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from None

    for item in entries:
        equation = item.create()
        big = " (big)" if item.has_big_molecule() else ""
        typer.echo(f"{item.key:<24} {item.kind.value:<14} {equation.name}{big}")


@app.command()
def show(
    key: Annotated[str, typer.Argument(help="Catalog key, as printed by 'list'.")],
    coefficients: Annotated[
        Optional[str], typer.Option(help="User coefficients, e.g. '2 2 1'. Defaults to all 1.")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON payload.")] = False,
) -> None:
    """Check a set of coefficients against a catalog equation."""
    catalog = default_catalog()
    if key not in catalog:
        raise typer.BadParameter(f"Unknown equation: {key}")
    equation = catalog.create(key)
    if coefficients is not None:
        _apply_coefficients(equation, _parse_coefficients(coefficients, equation))

    if as_json:
        typer.echo(json.dumps(_equation_payload(equation), indent=2, ensure_ascii=False))
        return

    typer.echo(equation.name)
    typer.echo(f"Coefficients: {' '.join(str(t.user_coefficient) for t in equation.terms)}")
    _echo_atom_counts(equation)
    if equation.balanced_and_simplified:
        typer.echo("Balanced")
    elif equation.balanced:
        typer.echo("Balanced, but not simplified")
    else:
        typer.echo("Not balanced")


@app.command()
def play(
    level: Annotated[int, typer.Option(help="Game level, starting at 1.")] = 1,
    config_file: Annotated[
        Optional[Path], typer.Option("--config", help="Path to JSON game settings.")
    ] = None,
    seed: Annotated[Optional[int], typer.Option(help="Random seed for challenge selection.")] = None,
    store_file: Annotated[
        Optional[Path], typer.Option("--store", help="SQLite file for results and best scores.")
    ] = None,
) -> None:
    """Play one game level in the terminal."""
    settings = load_settings(config_file) if config_file else GameSettings()
    if seed is not None:
        settings = GameSettings(**{**asdict(settings), "seed": seed})
    model = GameModel.from_settings(settings)

    with ExitStack() as stack:
        connection: Optional[sqlite3.Connection] = None
        if store_file is not None:
            connection = stack.enter_context(closing(sqlite_store.connect(store_file)))
            sqlite_store.ensure_schema(connection)
            for stored_level, (points, best_time) in sqlite_store.load_best_scores(connection).items():
                if stored_level < model.level_count:
                    model.restore_best(stored_level, points, best_time)

        try:
            model.start_game(level - 1)
        except ChallengeSelectionError as exc:
            raise typer.BadParameter(str(exc)) from None
        except ValueError as exc:
            raise typer.BadParameter(f"Level must be between 1 and {model.level_count}") from exc

        _play_level(model)

        current_level = model.level.get()
        typer.echo(f"\nLevel {current_level + 1} complete: {model.points.get()}/{model.perfect_score} points")
        typer.echo(f"Best score: {model.best_scores.get()[current_level]}")
        if model.is_new_best_time:
            typer.echo(f"New best time: {model.best_times.get()[current_level]:.1f}s")

        if connection is not None:
            game_id = sqlite_store.save_game(
                connection,
                level=current_level,
                points=model.points.get(),
                perfect_score=model.perfect_score,
                elapsed_s=model.elapsed_time.get(),
                settings=asdict(settings),
            )
            sqlite_store.save_challenges(connection, game_id, model.challenges)
            sqlite_store.save_best_scores(connection, model.best_scores.get(), model.best_times.get())


def _play_level(model: GameModel) -> None:
    last_tick = time.monotonic()
    while model.state.get() is not GameState.LEVEL_COMPLETE:
        equation = model.current_equation.get()
        typer.echo(f"\nChallenge {model.current_index.get() + 1}/{model.challenge_count}   Score: {model.points.get()}")
        typer.echo(_prompt_skeleton(equation))
        answer = typer.prompt("Coefficients")
        now = time.monotonic()
        model.tick(now - last_tick)
        last_tick = now

        try:
            _apply_coefficients(equation, _parse_coefficients(answer, equation, GAME_COEFFICIENT_RANGE))
        except typer.BadParameter as exc:
            typer.echo(exc.message)
            continue

        model.check()
        state = model.state.get()
        if state is GameState.PRESENT:
            typer.echo("Enter at least one non-zero coefficient.")
        elif state is GameState.CORRECT:
            typer.echo(f"Balanced! +{model.current_challenge.points} points")
            model.next()
        elif state is GameState.TRY_AGAIN:
            typer.echo("Not balanced. Atom counts (reactants | products):")
            _echo_atom_counts(equation)
            model.try_again()
        elif state is GameState.SHOW_ANSWER:
            typer.echo(f"Not balanced. The answer is {equation.name}")
            model.next()
