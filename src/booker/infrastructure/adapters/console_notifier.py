"""Terminal notifier: prints reminders instead of raising OS-level notifications."""

import logging

import typer

from booker.domain.ports import Notifier

logger = logging.getLogger(__name__)


class ConsoleNotifier(Notifier):
    def __init__(self, granted: bool = False, interactive: bool = True):
        """
        Args:
            granted: Permission already recorded for this installation.
            interactive: Ask on the terminal when permission is requested;
                otherwise requests are denied.
        """
        self.granted = granted
        self.interactive = interactive

    def request_permission(self) -> bool:
        if self.interactive:
            self.granted = typer.confirm("Allow Booker to show a daily reminder?", default=True)
        else:
            self.granted = False
        logger.info(f"Notification permission {'granted' if self.granted else 'denied'}")
        return self.granted

    def notify(self, title: str, body: str) -> None:
        if not self.granted:
            return
        typer.secho(title, fg="cyan", bold=True)
        typer.echo(body)
