"""Family member commands."""

import click

from familybudget.cli.error_handling import handle_domain_error
from familybudget.domain.errors import DomainError
from familybudget.domain.family_member import FamilyMemberService
from familybudget.domain.user import UserService


@click.group()
def member_group():
    """Manage family members."""
    pass


@member_group.command("list")
@click.pass_context
def list_members(ctx):
    """List family members."""
    service = FamilyMemberService(ctx.obj["db"])

    try:
        members = service.list_members(ctx.obj["user"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not members:
        click.echo("No family members found.")
        return

    click.echo("\nFamily members:")
    click.echo("-" * 60)
    for member in members:
        account = f" | user {member.user_id}" if member.user_id is not None else ""
        click.echo(f"ID: {member.id:3d} | {member.name:20s} | {member.relation:10s} | age {member.age}{account}")


@member_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--relation", required=True, help="Relation to the family (e.g., Child)")
@click.option("--age", required=True, type=int, help="Age in years")
@click.pass_context
def add_member(ctx, name: str, relation: str, age: int):
    """Add a family member (parents only)."""
    service = FamilyMemberService(ctx.obj["db"])

    try:
        member = service.create_member(ctx.obj["user"], name=name, relation=relation, age=age)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added family member '{member.name}' (ID: {member.id})")


@member_group.command("users")
@click.pass_context
def list_users(ctx):
    """List the user accounts of the family."""
    service = UserService(ctx.obj["db"])

    try:
        users = service.list_family_users(ctx.obj["user"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    for user in users:
        full_name = " ".join(part for part in (user.first_name, user.last_name) if part)
        click.echo(f"ID: {user.id:3d} | {user.username:15s} | {user.role.value:6s} | {full_name}")


def register_commands(cli):
    """Register family member commands with main CLI."""
    cli.add_command(member_group, name="member")
