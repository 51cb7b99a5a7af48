"""Notification commands."""

import click

from familybudget.domain.notification import NotificationService


@click.command("notifications")
@click.option("--unread", is_flag=True, help="Only show unread notifications")
@click.pass_context
def list_notifications(ctx, unread: bool):
    """List your notifications, most recent first."""
    service = NotificationService(ctx.obj["db"])
    user = ctx.obj["user"]

    notifications = service.list_unread(user) if unread else service.list_notifications(user)
    if not notifications:
        click.echo("No notifications.")
        return

    for notification in notifications:
        marker = " " if notification.is_read else "*"
        click.echo(f"{marker} {notification.title}: {notification.message}")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(list_notifications)
