#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
unconfusables — inspect, normalize and generate Unicode confusables (UTS #39).

Examples:
  $ unconfusables lookup 0
  $ unconfusables normalize paypa1
  $ unconfusables compare 0l Ol
  $ unconfusables variations g00gle --limit 500 --txt watchlist.txt
  $ unconfusables randomize paypal --probability 0.8 --seed 7
  $ unconfusables update snapshot.json
  $ unconfusables update --source confusables.txt snapshot.json
"""

import json
import random
from dataclasses import asdict
from typing import Optional

import click
import idna  # punycode rendering of look-alike labels

from .data import confusables as bundled
from .data import load_file
from .types import CONFUSABLE_TYPES, ConfusableMap, ConfusablesError
from .update import CONFUSABLES_URL, update_from_file, update_from_url
from .utils import (
    DEFAULT_PROBABILITY,
    DEFAULT_TYPE,
    are_confusable,
    count_confusable_variations,
    get_confusable_sources,
    get_confusable_variations,
    get_confusables,
    get_metadata,
    normalize_string,
    normalize_string_all,
    randomize_confusables,
)

TYPE_CHOICE = click.Choice(CONFUSABLE_TYPES)


def puny(label: str) -> str:
    # "paypal" => "paypal", "pаypal" => "xn--..."
    try:
        return idna.encode(label, uts46=True).decode("ascii")
    except idna.IDNAError:
        return "<invalid-idna>"


def dump(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _dataset(ctx: click.Context) -> ConfusableMap:
    return ctx.obj["dataset"]


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--data", "data_path", type=click.Path(exists=True, dir_okay=False), default=None,
              envvar="UNCONFUSABLES_DATA", help="Use a snapshot written by 'update' instead of the bundled one.")
@click.pass_context
def cli(ctx: click.Context, data_path: Optional[str]):
    """unconfusables — Unicode confusable lookup & look-alike generator (offline)."""
    try:
        dataset = load_file(data_path) if data_path else bundled
    except ConfusablesError as e:
        raise click.ClickException(str(e))
    ctx.ensure_object(dict)
    ctx.obj["dataset"] = dataset


@cli.command("lookup")
@click.argument("char", type=str)
@click.pass_context
def lookup_cmd(ctx: click.Context, char: str):
    """Show the mapping for CHAR and the characters that map to it."""
    dataset = _dataset(ctx)
    record = get_confusables(char, dataset=dataset)
    dump({
        "char": char[:1],
        "codepoint": f"U+{ord(char[0]):04X}" if char else None,
        "record": asdict(record) if record else None,
        "sources": get_confusable_sources(char, dataset=dataset),
    })


@cli.command("normalize")
@click.argument("text", type=str)
@click.option("--type", "classification", type=TYPE_CHOICE, default=DEFAULT_TYPE, show_default=True)
@click.option("--all", "fold_all", is_flag=True, help="Fold mappings of every classification.")
@click.pass_context
def normalize_cmd(ctx: click.Context, text: str, classification: str, fold_all: bool):
    """Print the confusable normal form of TEXT."""
    dataset = _dataset(ctx)
    if fold_all:
        click.echo(normalize_string_all(text, dataset=dataset))
    else:
        click.echo(normalize_string(text, classification, dataset=dataset))


@cli.command("compare")
@click.argument("first", type=str)
@click.argument("second", type=str)
@click.option("--type", "classification", type=TYPE_CHOICE, default=DEFAULT_TYPE, show_default=True)
@click.pass_context
def compare_cmd(ctx: click.Context, first: str, second: str, classification: str):
    """Check whether FIRST and SECOND are confusable. Exits 1 when they are not."""
    dataset = _dataset(ctx)
    same = are_confusable(first, second, classification, dataset=dataset)
    dump({
        "first": first,
        "second": second,
        "normalized": [
            normalize_string(first, classification, dataset=dataset),
            normalize_string(second, classification, dataset=dataset),
        ],
        "confusable": same,
    })
    if not same:
        ctx.exit(1)


@cli.command("variations")
@click.argument("text", type=str)
@click.option("--type", "classification", type=TYPE_CHOICE, default=DEFAULT_TYPE, show_default=True)
@click.option("--limit", type=int, default=10000, show_default=True,
              help="Refuse inputs whose variation count could exceed this (0 = no limit).")
@click.option("--json", "json_out", type=click.Path(writable=True), default=None, help="Write JSON output to file.")
@click.option("--txt", "txt_out", type=click.Path(writable=True), default=None, help="Write plain-text watchlist.")
@click.pass_context
def variations_cmd(ctx: click.Context, text: str, classification: str, limit: int,
                   json_out: Optional[str], txt_out: Optional[str]):
    """Enumerate every confusable variation of TEXT."""
    dataset = _dataset(ctx)
    try:
        found = get_confusable_variations(text, classification, dataset=dataset, limit=limit or None)
    except ConfusablesError as e:
        raise click.ClickException(str(e))

    # input first, rest in a stable order
    ordered = [text] + sorted(v for v in found if v != text)
    data = [{"variant": v, "punycode": puny(v)} for v in ordered]

    # Console preview (top 10)
    dump({
        "text": text,
        "bound": count_confusable_variations(text, classification, dataset=dataset),
        "count": len(data),
        "preview": data[:10],
    })

    if json_out:
        with open(json_out, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        click.echo(f"JSON written: {json_out}")

    if txt_out:
        with open(txt_out, "w", encoding="utf-8") as f:
            for d in data:
                f.write(d["variant"] + "\n")
        click.echo(f"TXT watchlist written: {txt_out}")


@cli.command("randomize")
@click.argument("text", type=str)
@click.option("--type", "classification", type=TYPE_CHOICE, default=None, help="Only substitute records of this type.")
@click.option("--probability", type=click.FloatRange(0.0, 1.0), default=DEFAULT_PROBABILITY, show_default=True)
@click.option("--exclude", type=str, default="", help="Characters that must never be substituted in.")
@click.option("--seed", type=int, default=None, help="Seed for reproducible output.")
@click.option("--count", type=click.IntRange(min=1), default=1, show_default=True)
@click.pass_context
def randomize_cmd(ctx: click.Context, text: str, classification: Optional[str], probability: float,
                  exclude: str, seed: Optional[int], count: int):
    """Randomly swap characters of TEXT for confusable look-alikes."""
    dataset = _dataset(ctx)
    rng = random.Random(seed)
    for _ in range(count):
        click.echo(randomize_confusables(
            text,
            probability=probability,
            classification=classification,
            exclude=set(exclude),
            dataset=dataset,
            rng=rng,
        ))


@cli.command("metadata")
@click.pass_context
def metadata_cmd(ctx: click.Context):
    """Show dataset version, date and mapping counts."""
    dump(asdict(get_metadata(dataset=_dataset(ctx))))


@cli.command("update", epilog=f"Default upstream table: {CONFUSABLES_URL}")
@click.argument("output", type=click.Path(writable=True, dir_okay=False))
@click.option("--source", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Read a local copy of confusables.txt instead of downloading it.")
@click.option("--url", default=None, help="Download the table from this URL.")
def update_cmd(output: str, source: Optional[str], url: Optional[str]):
    """Rebuild the snapshot OUTPUT from the upstream confusables.txt."""
    if source and url:
        raise click.UsageError("--source and --url are mutually exclusive")
    try:
        if source:
            dataset = update_from_file(source, output)
        else:
            dataset = update_from_url(output, url)
    except ConfusablesError as e:
        raise click.ClickException(str(e))
    meta = get_metadata(dataset=dataset)
    click.echo(f"Parsed {meta.total_mappings} mappings (version {meta.version}, {meta.date})")
    click.echo(f"Snapshot written: {output}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
