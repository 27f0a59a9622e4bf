"""
Service layer for teams app.

Services:
- create_team: Create a team with its owner membership in one transaction
- join_team: Join a team by invite code
- get_user_teams: Teams a user belongs to, with member counts
- get_team_members: Member roster ordered by role
- invite_by_email: Queue a team invitation email
"""

import logging
import string

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.utils.crypto import get_random_string

from .models import Team, TeamMember

logger = logging.getLogger(__name__)

INVITE_CODE_CHARS = string.ascii_uppercase + string.digits

ROLE_RANK = {
    TeamMember.Role.OWNER: 0,
    TeamMember.Role.ADMIN: 1,
    TeamMember.Role.MEMBER: 2,
}


class TeamNotFound(Exception):
    """No team matches the given invite code, or the user cannot see it."""


class AlreadyMember(Exception):
    """The user already has a membership row for this team."""


def role_rank(role) -> int:
    """Lower ranks sort first: owner, admin, member. Unknown roles sort last."""
    return ROLE_RANK.get(role, len(ROLE_RANK))


def generate_invite_code(length=None):
    """Random code of uppercase letters and digits that no team uses yet."""
    length = length or getattr(settings, 'INVITE_CODE_LENGTH', 8)
    while True:
        code = get_random_string(length, allowed_chars=INVITE_CODE_CHARS)
        if not Team.objects.filter(invite_code=code).exists():
            return code


def create_team(user, name: str, description: str = ''):
    """
    Create a team owned by `user`.

    The team row and the owner membership row are written in one
    transaction, so a failure leaves neither behind.

    Raises:
        ValidationError: If the name is blank
    """
    if not name or not name.strip():
        raise ValidationError("Team name is required.")

    with transaction.atomic():
        team = Team.objects.create(
            name=name.strip(),
            description=description.strip() if description else '',
            owner=user,
            invite_code=generate_invite_code(),
        )
        TeamMember.objects.create(team=team, user=user, role=TeamMember.Role.OWNER)

    logger.info(f'Team {team.pk} "{team.name}" created by {user.email}')
    return team


def join_team(user, code: str):
    """
    Add `user` to the team whose invite code matches `code` exactly.

    Raises:
        TeamNotFound: If no team has that code
        AlreadyMember: If the user is already on the team
    """
    code = (code or '').strip()
    if not code:
        raise TeamNotFound("Invalid invite code")

    try:
        team = Team.objects.get(invite_code=code)
    except Team.DoesNotExist:
        raise TeamNotFound("Invalid invite code")

    if TeamMember.objects.filter(team=team, user=user).exists():
        raise AlreadyMember("You are already a member of this team")

    try:
        with transaction.atomic():
            TeamMember.objects.create(team=team, user=user, role=TeamMember.Role.MEMBER)
    except IntegrityError:
        # Lost a race with a concurrent join by the same user
        raise AlreadyMember("You are already a member of this team")

    logger.info(f'{user.email} joined team {team.pk}')
    return team


def get_user_teams(user):
    """Teams `user` is a member of, each with a `member_count` attribute."""
    teams = list(
        Team.objects.filter(memberships__user=user)
        .select_related('owner')
        .order_by('name')
    )
    for team in teams:
        team.member_count = TeamMember.objects.filter(team=team).count()
    return teams


def get_team_for_member(user, team_id):
    """
    Raises:
        TeamNotFound: If the team does not exist or `user` is not on it
    """
    try:
        return Team.objects.get(pk=team_id, memberships__user=user)
    except Team.DoesNotExist:
        raise TeamNotFound("Team not found")


def get_team_members(team, user):
    """
    Roster of `team`, owner first, then admins, then members, each group by
    join time. Any member may read it.

    Raises:
        TeamNotFound: If `user` is not a member of `team`
    """
    memberships = list(
        TeamMember.objects.filter(team=team).select_related('user').order_by('joined_at', 'pk')
    )
    if not any(membership.user_id == user.pk for membership in memberships):
        raise TeamNotFound("Team not found")
    return sorted(memberships, key=lambda membership: role_rank(membership.role))


def invite_by_email(team, inviter, email: str):
    """
    Queue an invitation email carrying the team's invite code.

    Raises:
        ValidationError: If the address is invalid
        TeamNotFound: If `inviter` is not a member of `team`
    """
    from apps.notifications.services import generate_team_invite_email, schedule_email_notification

    email = (email or '').strip().lower()
    validate_email(email)

    if not TeamMember.objects.filter(team=team, user=inviter).exists():
        raise TeamNotFound("Team not found")

    subject, body = generate_team_invite_email(
        team_name=team.name,
        inviter_name=inviter.get_full_name(),
        invite_code=team.invite_code,
    )
    return schedule_email_notification(
        user=inviter,
        to=email,
        subject=subject,
        body=body,
    )
