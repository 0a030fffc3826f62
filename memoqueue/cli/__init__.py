import click

from .commands.memo import memo_command
from .commands.queue import queue_command


@click.group()
def app() -> None:
    pass


app.add_command(memo_command, name="memo")
app.add_command(queue_command, name="queue")
__all__ = ["app"]
