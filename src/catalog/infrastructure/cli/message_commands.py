"""CLI commands that feed broker messages to the consumers.

Useful to replay captured traffic against a store, or to poke a consumer
by hand. Each message goes through the same dispatcher the broker client
uses, and the resulting ACK/REJECT decision is printed.
"""

from __future__ import annotations

import json

import click

from catalog.config.settings import CatalogSettings
from catalog.infrastructure.bootstrap import message_dispatcher
from catalog.infrastructure.cli._output import failure
from catalog.infrastructure.errors import Disposition
from catalog.infrastructure.messaging.dispatcher import Decision, Delivery


def _describe(delivery: Delivery, decision: Decision) -> str:
    line = f"#{decision.tag} {delivery.queue}: {decision.disposition.value}"
    if decision.disposition is Disposition.REJECT:
        line += " (no requeue)"
    if decision.reply is not None:
        line += f" reply={decision.reply.decode('utf-8')}"
    return line


@click.command("send")
@click.argument("queue")
@click.argument("body")
@click.pass_obj
def message_send(settings: CatalogSettings, queue: str, body: str) -> None:
    """Dispatch one message BODY (JSON) as if it arrived on QUEUE."""
    try:
        dispatcher = message_dispatcher(settings)
    except Exception as exc:
        raise failure(exc) from exc

    delivery = Delivery(queue=queue, body=body, tag=1)
    click.echo(_describe(delivery, dispatcher.dispatch(delivery)))


@click.command("replay")
@click.argument("messages", type=click.File("r"))
@click.option("--workers", type=int, default=None, help="Concurrent consumers.")
@click.pass_obj
def message_replay(settings: CatalogSettings, messages, workers: int | None) -> None:
    """Dispatch JSON lines of {"queue": ..., "body": ...} concurrently."""
    deliveries: list[Delivery] = []
    for lineno, line in enumerate(messages, start=1):
        if not line.strip():
            continue
        try:
            raw = json.loads(line)
            queue, body = raw["queue"], raw["body"]
        except (ValueError, KeyError, TypeError):
            raise click.BadParameter(
                f"Line {lineno}: expected an object with 'queue' and 'body'.",
                param_hint="MESSAGES",
            )
        if not isinstance(body, str):
            body = json.dumps(body)
        deliveries.append(Delivery(queue=queue, body=body, tag=lineno))

    try:
        dispatcher = message_dispatcher(settings)
    except Exception as exc:
        raise failure(exc) from exc

    decisions = dispatcher.dispatch_all(deliveries, workers=workers or settings.workers)
    for delivery, decision in zip(deliveries, decisions):
        click.echo(_describe(delivery, decision))
