"""
Team models for invite-code based collaboration.

A team is joined by entering its invite code. The creator is recorded
both as the team's owner and as its first member with the owner role.
"""

from django.conf import settings
from django.db import models


class Team(models.Model):

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='owned_teams',
    )
    invite_code = models.CharField(
        max_length=16,
        unique=True,
        help_text='Uppercase letters and digits, shared to let others join'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'teams'
        verbose_name = 'team'
        verbose_name_plural = 'teams'
        ordering = ['name']

    def __str__(self):
        return self.name


class TeamMember(models.Model):

    class Role(models.TextChoices):
        OWNER = 'owner', 'Owner'
        ADMIN = 'admin', 'Admin'
        MEMBER = 'member', 'Member'

    team = models.ForeignKey(
        Team,
        on_delete=models.CASCADE,
        related_name='memberships',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='team_memberships',
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.MEMBER,
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'team_members'
        verbose_name = 'team member'
        verbose_name_plural = 'team members'
        constraints = [
            models.UniqueConstraint(fields=['team', 'user'], name='unique_team_member'),
        ]

    def __str__(self):
        return f"{self.user} in {self.team} ({self.role})"
