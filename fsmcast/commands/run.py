import asyncio
import sys

import click
from pydantic import ValidationError

from fsmcast.automaton import RandomSymbolSource
from fsmcast.coordinator import AcknowledgmentPolicy, FixedRoundPolicy
from fsmcast.env import Env, load_env
from fsmcast.logging.models import LogLevel
from fsmcast.runner import GroupResult, LocalRunner


def format_summary(group: GroupResult) -> str:
    result = group.coordinator
    lines = [
        f"status: {result.status.value}",
        f"rounds: {result.rounds}",
        f"acknowledged: {sorted(result.completed)}",
        f"missing: {sorted(result.missing)}",
        f"rejected: {result.rejected}",
    ]

    for rank, state in sorted(group.workers.items()):
        lines.append(
            f"worker {rank}: {state.automaton_state.name} after {state.received} messages"
            f"{' (acknowledged)' if state.acknowledged else ''}"
        )

    return "\n".join(lines)


@click.command()
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Number of worker processes (defaults to physical CPU count)",
)
@click.option(
    "--rounds",
    type=click.IntRange(min=0),
    default=None,
    help="Broadcast exactly this many rounds instead of waiting for every acknowledgment",
)
@click.option(
    "--max-rounds",
    type=click.IntRange(min=0),
    default=None,
    help="Round cap for the acknowledgment policy",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the random symbol source",
)
@click.option(
    "--timeout",
    type=str,
    default=None,
    help="Overall coordinator timeout, e.g. 30s or 1m",
)
@click.option(
    "--executor",
    type=click.Choice(["process", "task"]),
    default=None,
    help="Run workers as spawned processes or asyncio tasks",
)
@click.option(
    "--block-size",
    type=click.IntRange(min=1),
    default=None,
    help="Number of symbol repetitions per message",
)
@click.option(
    "--log-level",
    type=click.Choice(
        [level.value.lower() for level in LogLevel],
        case_sensitive=False,
    ),
    default=None,
    help="Log level",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a .env file",
)
def run(
    workers: int | None,
    rounds: int | None,
    max_rounds: int | None,
    seed: int | None,
    timeout: str | None,
    executor: str | None,
    block_size: int | None,
    log_level: str | None,
    env_file: str | None,
):
    """
    Run a coordinator and a group of automaton workers on this host.
    """
    overrides = {
        "FSMCAST_WORKERS": workers,
        "FSMCAST_COORDINATOR_TIMEOUT": timeout,
        "FSMCAST_WORKER_EXECUTOR_TYPE": executor,
        "FSMCAST_MESSAGE_BLOCK_SIZE": block_size,
        "FSMCAST_LOG_LEVEL": log_level.lower() if log_level else None,
    }

    try:
        env = load_env(
            Env,
            env_file=env_file,
            override=Env(
                **{name: value for name, value in overrides.items() if value is not None}
            ),
        )

    except ValidationError as err:
        raise click.UsageError(str(err)) from err

    if rounds is not None:
        policy = FixedRoundPolicy(rounds)

    else:
        policy = AcknowledgmentPolicy(max_rounds=max_rounds)

    runner = LocalRunner(env=env)

    group = asyncio.run(
        runner.run(
            RandomSymbolSource(seed=seed),
            policy,
        )
    )

    click.echo(format_summary(group))

    if not group.coordinator.all_acknowledged:
        sys.exit(1)
