"""
Forms for teams app.
"""

from django import forms

from apps.todos.forms import INPUT_CLASS


class TeamForm(forms.Form):
    name = forms.CharField(
        max_length=100,
        widget=forms.TextInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Team name',
        }),
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={
            'class': INPUT_CLASS,
            'rows': 3,
            'placeholder': 'What is this team about?',
        }),
    )

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise forms.ValidationError('Team name is required.')
        return name


class JoinTeamForm(forms.Form):
    invite_code = forms.CharField(
        max_length=16,
        widget=forms.TextInput(attrs={
            'class': INPUT_CLASS + ' font-mono uppercase',
            'placeholder': 'Enter the 8-character invite code',
        }),
    )

    def clean_invite_code(self):
        return self.cleaned_data.get('invite_code', '').strip()


class InviteForm(forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'teammate@example.com',
        }),
    )
