"""
Views for teams app.

Includes:
- Team list with create and join forms
- Team detail (invite code and member roster)
- Invite by email
"""

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import Http404
from django.shortcuts import render, redirect
from django.views.decorators.http import require_POST, require_http_methods

from .forms import TeamForm, JoinTeamForm, InviteForm
from .services import (
    TeamNotFound, AlreadyMember,
    create_team, join_team, get_user_teams, get_team_for_member,
    get_team_members, invite_by_email,
)


def _team_list_context(request, team_form=None, join_form=None):
    return {
        'teams': get_user_teams(request.user),
        'team_form': team_form or TeamForm(),
        'join_form': join_form or JoinTeamForm(),
    }


@login_required
def team_list(request):
    return render(request, 'teams/team_list.html', _team_list_context(request))


@login_required
@require_POST
def team_create(request):
    form = TeamForm(request.POST)
    if form.is_valid():
        try:
            team = create_team(
                request.user,
                name=form.cleaned_data['name'],
                description=form.cleaned_data.get('description', ''),
            )
            messages.success(request, f'🎉 Team "{team.name}" created!')
            return redirect('teams:team_detail', pk=team.pk)
        except ValidationError as e:
            messages.error(request, ' '.join(e.messages))

    return render(
        request,
        'teams/team_list.html',
        _team_list_context(request, team_form=form),
        status=400,
    )


@login_required
@require_POST
def team_join(request):
    form = JoinTeamForm(request.POST)
    if form.is_valid():
        try:
            team = join_team(request.user, form.cleaned_data['invite_code'])
            messages.success(request, f"🎉 You've joined {team.name}.")
            return redirect('teams:team_detail', pk=team.pk)
        except (TeamNotFound, AlreadyMember) as e:
            messages.error(request, str(e))

    return render(
        request,
        'teams/team_list.html',
        _team_list_context(request, join_form=form),
        status=400,
    )


@login_required
def team_detail(request, pk):
    try:
        team = get_team_for_member(request.user, pk)
        members = get_team_members(team, request.user)
    except TeamNotFound:
        raise Http404("Team not found")

    return render(request, 'teams/team_detail.html', {
        'team': team,
        'members': members,
        'invite_form': InviteForm(),
    })


@login_required
@require_http_methods(["POST"])
def team_invite(request, pk):
    try:
        team = get_team_for_member(request.user, pk)
    except TeamNotFound:
        raise Http404("Team not found")

    form = InviteForm(request.POST)
    if form.is_valid():
        try:
            invite_by_email(team, request.user, form.cleaned_data['email'])
            messages.success(request, f'Invitation sent to {form.cleaned_data["email"]}.')
        except ValidationError as e:
            messages.error(request, ' '.join(e.messages))
    else:
        messages.error(request, 'Enter a valid email address.')

    return redirect('teams:team_detail', pk=team.pk)
