#!/usr/bin/env python3
"""
Evaluate - CLI Entry Point

Usage:
    python main.py process
    python main.py run mypkg.search:build_index mypkg.fixtures:PAYLOAD -n 10 -m all
    python main.py value payload.json --label payload
"""

import os
import sys
import json
import logging
import importlib
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import click
from rich.console import Console
from rich.table import Table

from evaluate import Evaluate, MetricSet, __version__
from evaluate.config import Config, METRIC_LABELS, NULL_MARKER
from evaluate.probes import PROBES, list_probes
from evaluate.benchmark import EvaluationResult, Reporter

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()

ACTIONS = ['stdout', 'log', 'debug']


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    
    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )
    
    # Also set level for our modules
    for module in ['evaluate.benchmark', 'evaluate.probes', 'evaluate.evaluation']:
        logging.getLogger(module).setLevel(level)

    # The log sink emits at INFO whatever the verbosity
    logging.getLogger(Config.LOGGER_NAME).setLevel(min(level, logging.INFO))


def resolve_reference(reference: str):
    """
    Import the object named by a 'package.module:attribute' reference.
    
    Raises:
        click.BadParameter: If the reference cannot be resolved
    """
    module_name, sep, attribute = reference.partition(':')
    if not sep or not module_name or not attribute:
        raise click.BadParameter(f"Expected 'module:attribute', got '{reference}'")
    
    # Targets usually live next to where the command is run
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())
    
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}")
    
    for part in attribute.split('.'):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attribute}'")
    
    return obj


def parse_metrics(ctx, param, value):
    """Click callback turning a metric list into a MetricSet."""
    try:
        return MetricSet.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def evaluation_options(func):
    """Options shared by all evaluating commands."""
    func = click.option('--json', 'export_json', is_flag=True, help='Export results as JSON')(func)
    func = click.option('--action', '-a', type=click.Choice(ACTIONS), default='stdout', help='Where to send the report')(func)
    func = click.option('--label', '-l', default=None, help='Label shown in the report header')(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output (INFO level)')
@click.option('--debug', is_flag=True, help='Enable debug output (DEBUG level, shows every sample)')
@click.pass_context
def cli(ctx, verbose, debug):
    """
    Evaluate - micro-benchmark tool
    
    Measure memory, execution time and cost of Python callables and data
    values, averaged over repeated runs.
    
    Use -v for verbose output, --debug for per-sample logs.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['debug'] = debug
    setup_logging(verbose, debug)


@cli.command()
@click.argument('targets', nargs=-1, required=True)
@click.option('--times', '-n', default=Config.REPETITIONS, type=click.IntRange(min=1), help='Repetitions per target')
@click.option('--metrics', '-m', default=Config.METRICS, callback=parse_metrics, help='basic, all, or a list like memory,time')
@evaluation_options
def run(targets, times, metrics, label, action, export_json):
    """
    Evaluate importable targets.
    
    Callables are invoked; any other attribute is measured as a value.
    
    Example:
        python main.py run mypkg.search:build_index -n 10
    """
    subjects = [resolve_reference(t) for t in targets]
    
    evaluation = Evaluate(subjects, metrics=metrics, label=label, repetitions=times)
    _finish(evaluation, action, export_json, names=list(targets))


@cli.command()
@click.argument('data_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--times', '-n', default=Config.REPETITIONS, type=click.IntRange(min=1), help='Repetitions')
@click.option('--metrics', '-m', default='all', callback=parse_metrics, help='basic, all, or a list like memory,count')
@evaluation_options
def value(data_file, times, metrics, label, action, export_json):
    """
    Evaluate the contents of a JSON file as a data value.
    
    Example:
        python main.py value payload.json -m all
    """
    with open(data_file, "r", encoding="utf-8") as f:
        data = json.load(f)
    
    evaluation = Evaluate([data], metrics=metrics, label=label or Path(data_file).name, repetitions=times)
    _finish(evaluation, action, export_json, names=[data_file])


@cli.command()
@evaluation_options
def process(label, action, export_json):
    """
    Evaluate this process: peak memory and time since start.
    
    Example:
        python main.py process --action log
    """
    evaluation = Evaluate(None, label=label)
    _finish(evaluation, action, export_json, names=['process'])


def _finish(evaluation: Evaluate, action: str, export_json: bool, names):
    """Emit the report, then print the per-target table and export if asked."""
    evaluation.terminate(action)
    
    if len(evaluation.results) > 1:
        _print_results_table(evaluation, names)
    
    if export_json:
        Config.ensure_directories()
        reporter = Reporter()
        json_path = reporter.generate_json(
            EvaluationResult(results=evaluation.results),
            label=evaluation.label,
            metrics=evaluation.metrics,
        )
        console.print(f"📊 JSON results: [green]{json_path}[/green]")


def _print_results_table(evaluation: Evaluate, names):
    """Print one row per target with the selected metrics."""
    keys = evaluation.metrics.keys()
    
    table = Table(title=f"Evaluation for {evaluation.label}" if evaluation.label else "Evaluation")
    table.add_column("Target", style="cyan")
    table.add_column("Mode")
    for key in keys:
        table.add_column(METRIC_LABELS[key], justify="right")
    
    for name, result in zip(names, evaluation.results):
        values = [getattr(result, key) for key in keys]
        table.add_row(
            name,
            result.mode.value,
            *[NULL_MARKER if v is None else f"{v:g}" for v in values],
        )
    
    console.print(table)


@cli.command('list-probes')
def list_probes_cmd():
    """List available memory probes."""
    console.print("\n[bold]Available Probes:[/bold]\n")
    
    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Default")
    
    for name in list_probes():
        probe_class = PROBES[name]
        default = "✅" if name == Config.PROBE else ""
        table.add_row(name, probe_class.display_name, default)
    
    console.print(table)
    console.print("\nTo choose a probe, set EVALUATE_PROBE in .env")


if __name__ == "__main__":
    cli()
