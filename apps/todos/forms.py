"""
Forms for todos app.

Includes:
- TodoForm: Create and edit todos; category choices limited to the user's own
- CategoryForm: Create and edit categories
"""

from django import forms

from .models import Todo, Category

INPUT_CLASS = (
    'block w-full rounded-md border-slate-600 bg-slate-800 text-white '
    'shadow-sm focus:border-emerald-500 focus:ring-emerald-500 sm:text-sm'
)


class TodoForm(forms.ModelForm):

    class Meta:
        model = Todo
        fields = ['title', 'description', 'priority', 'category', 'due_date', 'reminder_date']
        widgets = {
            'title': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'What needs to be done?',
            }),
            'description': forms.Textarea(attrs={
                'class': INPUT_CLASS,
                'rows': 3,
                'placeholder': 'Add some details...',
            }),
            'priority': forms.Select(attrs={'class': INPUT_CLASS}),
            'category': forms.Select(attrs={'class': INPUT_CLASS}),
            'due_date': forms.DateTimeInput(
                attrs={'type': 'datetime-local', 'class': INPUT_CLASS},
                format='%Y-%m-%dT%H:%M',
            ),
            'reminder_date': forms.DateTimeInput(
                attrs={'type': 'datetime-local', 'class': INPUT_CLASS},
                format='%Y-%m-%dT%H:%M',
            ),
        }

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = user

        if user is not None:
            self.fields['category'].queryset = Category.objects.filter(user=user).order_by('name')
        else:
            self.fields['category'].queryset = Category.objects.none()

        self.fields['category'].required = False
        self.fields['category'].empty_label = 'No category'
        self.fields['due_date'].required = False
        self.fields['reminder_date'].required = False
        self.fields['due_date'].input_formats = ['%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M']
        self.fields['reminder_date'].input_formats = self.fields['due_date'].input_formats

    def clean_title(self):
        title = self.cleaned_data.get('title', '').strip()
        if not title:
            raise forms.ValidationError('Task title is required.')
        return title


class CategoryForm(forms.ModelForm):

    class Meta:
        model = Category
        fields = ['name', 'color', 'icon']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'e.g., Work',
            }),
            'color': forms.TextInput(attrs={
                'type': 'color',
                'class': 'h-10 w-16 rounded border-slate-600',
            }),
            'icon': forms.RadioSelect(),
        }

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise forms.ValidationError('Category name is required.')
        return name

    def clean_color(self):
        return (self.cleaned_data.get('color') or '').upper()
