import click

from .run import run


@click.group()
def cli():
    """Coordinate a group of automaton workers."""


cli.add_command(run)
