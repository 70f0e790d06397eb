from django import forms

from reviews.models import Restaurant, Dish
from reviews.uploads import ALLOWED_IMAGE_TYPES

IMAGE_ACCEPT = ",".join(ALLOWED_IMAGE_TYPES)


class AdminLoginForm(forms.Form):
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": "form-control", "placeholder": "Admin password", "id": "pass"})
    )


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault("widget", MultipleFileInput(attrs={"class": "form-control", "accept": IMAGE_ACCEPT}))
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            return [single_file_clean(d, initial) for d in data]
        return [single_file_clean(data, initial)] if data else []


class RestaurantForm(forms.ModelForm):
    image = forms.FileField(
        required=False,
        widget=forms.FileInput(attrs={"class": "form-control", "accept": IMAGE_ACCEPT}),
    )
    clear_image = forms.BooleanField(
        required=False,
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"}),
    )

    class Meta:
        model = Restaurant
        fields = [
            "name", "slug", "category", "cuisine_type", "rating", "review_text",
            "address", "latitude", "longitude",
            "ambiance_rating", "cleanliness_rating", "service_rating", "value_rating", "wait_time_rating",
            "menu_review", "vibe_review", "location_review", "tips",
        ]
        widgets = {
            "name": forms.TextInput(attrs={"class": "form-control"}),
            "slug": forms.TextInput(attrs={"class": "form-control", "placeholder": "lowercase-with-hyphens"}),
            "category": forms.Select(attrs={"class": "form-control"}),
            "cuisine_type": forms.TextInput(attrs={"class": "form-control"}),
            "rating": forms.NumberInput(attrs={"class": "form-control", "min": 1, "max": 5}),
            "review_text": forms.Textarea(attrs={"class": "form-control", "rows": 5}),
            "address": forms.TextInput(attrs={"class": "form-control", "id": "address", "autocomplete": "off"}),
            "latitude": forms.NumberInput(attrs={"class": "form-control", "step": "any", "id": "latitude"}),
            "longitude": forms.NumberInput(attrs={"class": "form-control", "step": "any", "id": "longitude"}),
            "menu_review": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
            "vibe_review": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
            "location_review": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
            "tips": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in Restaurant.SUB_RATING_FIELDS:
            self.fields[field].widget.attrs.update({"class": "form-control", "min": 1, "max": 5})
        if not (self.instance and self.instance.image_url):
            del self.fields["clear_image"]

    def validate_unique(self):
        # Slug collisions are reported by the store when saving
        pass

    def review_fields(self):
        """Cleaned record fields, without the image controls. Blank sections are stored as null."""
        fields = {name: self.cleaned_data[name] for name in self._meta.fields if name in self.cleaned_data}
        for name in Restaurant.REVIEW_SECTION_FIELDS:
            if not (fields.get(name) or "").strip():
                fields[name] = None
        return fields


class DishForm(forms.ModelForm):
    new_images = MultipleFileField(required=False)
    remove_images = forms.MultipleChoiceField(
        required=False,
        widget=forms.CheckboxSelectMultiple(attrs={"class": "form-check-input"}),
    )

    class Meta:
        model = Dish
        fields = ["name", "review_text", "food_rating", "service_rating", "price_rating"]
        widgets = {
            "name": forms.TextInput(attrs={"class": "form-control"}),
            "review_text": forms.Textarea(attrs={"class": "form-control", "rows": 4}),
            "food_rating": forms.NumberInput(attrs={"class": "form-control", "min": 1, "max": 5}),
            "service_rating": forms.NumberInput(attrs={"class": "form-control", "min": 1, "max": 5}),
            "price_rating": forms.NumberInput(attrs={"class": "form-control", "min": 1, "max": 5}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        existing = self.instance.images if self.instance and self.instance.pk else []
        self.fields["remove_images"].choices = [(key, key) for key in existing or []]

    def review_fields(self):
        return {name: self.cleaned_data[name] for name in self._meta.fields}

    def kept_images(self):
        removed = set(self.cleaned_data.get("remove_images") or [])
        return [key for key in (self.instance.images or []) if key not in removed]
