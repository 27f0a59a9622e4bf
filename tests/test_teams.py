# tests/test_teams.py

import string
from unittest import mock

import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.urls import reverse

from apps.notifications.models import EmailNotification
from apps.teams.models import Team, TeamMember
from apps.teams.services import (
    TeamNotFound, AlreadyMember,
    create_team, join_team, get_user_teams, get_team_members,
    invite_by_email, generate_invite_code, role_rank,
)

pytestmark = pytest.mark.django_db


@pytest.fixture()
def team(user):
    return create_team(user, 'Rocket', 'Launch stuff')


# =============================================================================
# create_team
# =============================================================================

def test_create_team_adds_owner_membership(user, team) -> None:
    assert team.owner == user
    membership = TeamMember.objects.get(team=team)
    assert membership.user == user
    assert membership.role == TeamMember.Role.OWNER


def test_invite_code_shape(team) -> None:
    assert len(team.invite_code) == 8
    assert set(team.invite_code) <= set(string.ascii_uppercase + string.digits)


def test_generate_invite_code_length() -> None:
    assert len(generate_invite_code(12)) == 12


def test_create_team_requires_name(user) -> None:
    with pytest.raises(ValidationError):
        create_team(user, '   ')
    assert Team.objects.count() == 0


def test_create_team_is_atomic(user) -> None:
    with mock.patch.object(TeamMember.objects, 'create', side_effect=DatabaseError('insert failed')):
        with pytest.raises(DatabaseError):
            create_team(user, 'Orphan')

    assert Team.objects.count() == 0
    assert TeamMember.objects.count() == 0


# =============================================================================
# join_team
# =============================================================================

def test_join_unknown_code(user) -> None:
    with pytest.raises(TeamNotFound):
        join_team(user, 'ABCD1234')
    assert TeamMember.objects.count() == 0


def test_join_blank_code(user) -> None:
    with pytest.raises(TeamNotFound):
        join_team(user, '  ')


def test_join_adds_member(other_user, team) -> None:
    joined = join_team(other_user, f'  {team.invite_code} ')
    assert joined == team
    assert TeamMember.objects.get(team=team, user=other_user).role == TeamMember.Role.MEMBER


def test_join_code_is_exact_match(other_user, team) -> None:
    Team.objects.filter(pk=team.pk).update(invite_code='ROCKET42')
    with pytest.raises(TeamNotFound):
        join_team(other_user, 'rocket42')


def test_join_twice_is_already_member(other_user, team) -> None:
    join_team(other_user, team.invite_code)
    with pytest.raises(AlreadyMember):
        join_team(other_user, team.invite_code)
    assert TeamMember.objects.filter(team=team, user=other_user).count() == 1


def test_owner_joining_own_team_is_already_member(user, team) -> None:
    with pytest.raises(AlreadyMember):
        join_team(user, team.invite_code)
    assert TeamMember.objects.filter(team=team).count() == 1


# =============================================================================
# Rosters
# =============================================================================

def test_get_user_teams_with_member_counts(user, other_user, team) -> None:
    solo = create_team(other_user, 'Solo')
    join_team(other_user, team.invite_code)

    counts = {t.name: t.member_count for t in get_user_teams(other_user)}
    assert counts == {'Rocket': 2, 'Solo': 1}
    assert [t.name for t in get_user_teams(user)] == ['Rocket']
    assert solo not in get_user_teams(user)


def test_get_team_members_ordered_by_role(user, other_user, team, django_user_model) -> None:
    carol = django_user_model.objects.create_user(email='carol@example.com', password='x', full_name='Carol')
    join_team(other_user, team.invite_code)
    join_team(carol, team.invite_code)
    TeamMember.objects.filter(team=team, user=carol).update(role=TeamMember.Role.ADMIN)

    roster = get_team_members(team, other_user)
    assert [(m.user.email, m.role) for m in roster] == [
        ('alice@example.com', 'owner'),
        ('carol@example.com', 'admin'),
        ('bob@example.com', 'member'),
    ]


def test_get_team_members_requires_membership(other_user, team) -> None:
    with pytest.raises(TeamNotFound):
        get_team_members(team, other_user)


def test_role_rank_precedence() -> None:
    assert role_rank('owner') < role_rank('admin') < role_rank('member') < role_rank('guest')


# =============================================================================
# Invitations
# =============================================================================

def test_invite_by_email_queues_invitation(user, team) -> None:
    invite_by_email(team, user, ' Dave@Example.com ')

    email = EmailNotification.objects.get()
    assert email.email == 'dave@example.com'
    assert 'Rocket' in email.subject
    assert team.invite_code in email.body
    assert email.user == user


def test_invite_by_email_rejects_bad_address(user, team) -> None:
    with pytest.raises(ValidationError):
        invite_by_email(team, user, 'not-an-email')
    assert EmailNotification.objects.count() == 0


def test_invite_by_email_requires_membership(other_user, team) -> None:
    with pytest.raises(TeamNotFound):
        invite_by_email(team, other_user, 'dave@example.com')


# =============================================================================
# Views
# =============================================================================

def test_team_create_view(auth_client, user) -> None:
    response = auth_client.post(reverse('teams:team_create'), {'name': 'Crew', 'description': ''})

    team = Team.objects.get(name='Crew')
    assert response.status_code == 302
    assert response.url == reverse('teams:team_detail', args=[team.pk])


def test_team_join_view_with_bad_code(auth_client) -> None:
    response = auth_client.post(reverse('teams:team_join'), {'invite_code': 'NOPE0000'})

    assert response.status_code == 400
    assert b'Invalid invite code' in response.content


def test_team_detail_hidden_from_non_members(client, other_user, team) -> None:
    client.force_login(other_user)
    assert client.get(reverse('teams:team_detail', args=[team.pk])).status_code == 404


def test_team_detail_shows_code_and_roster(auth_client, team) -> None:
    response = auth_client.get(reverse('teams:team_detail', args=[team.pk]))

    assert response.status_code == 200
    assert team.invite_code in response.content.decode()
    assert [m.role for m in response.context['members']] == ['owner']
