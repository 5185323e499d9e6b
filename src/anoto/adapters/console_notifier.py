"""Console notification adapter."""

import click


class ConsoleNotifier:
    """
    Terminal notifier.

    Implements Notifier protocol. Prints the reminder to stdout.
    """

    def __init__(self, bell: bool = False):
        self.bell = bell

    def notify(self, title: str, body: str) -> bool:
        prefix = "\a" if self.bell else ""
        click.echo(f"{prefix}{click.style(title, bold=True)}: {body}")
        return True
