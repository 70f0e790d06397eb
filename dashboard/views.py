import copy
import logging

from django.contrib import messages
from django.db.models import Count
from django.http import Http404
from django.shortcuts import render, redirect
from django.views.decorators.http import require_http_methods
from rest_framework.exceptions import APIException

from authentication.exceptions import first_error_message
from authentication.tokens import (
    create_admin_token, verify_password, set_admin_cookie, clear_admin_cookie,
    request_has_admin_token,
)
from reviews import services
from reviews.blobs import blob_store
from reviews.uploads import store_image
from .decorators import admin_required
from .forms import AdminLoginForm, RestaurantForm, DishForm

logger = logging.getLogger(__name__)


def error_message(exc):
    return first_error_message(exc.detail)


def find_or_404(store, pk):
    obj = store.find(pk)
    if obj is None:
        raise Http404(store.not_found_message)
    return obj


def upload_images(files):
    """Store every file or none of them; returns the new keys."""
    keys = []
    try:
        for uploaded in files:
            keys.append(store_image(uploaded))
    except APIException:
        if keys:
            blob_store.remove(keys)
        raise
    return keys


# =============== SESSION ===============

def signin(request):
    if request.method == "POST":
        form = AdminLoginForm(request.POST)
        if form.is_valid() and verify_password(form.cleaned_data['password']):
            token = create_admin_token()
            if token is not None:
                logger.info("Admin logged in")
                return set_admin_cookie(redirect('dashboard'), token)

        logger.warning("Rejected admin login attempt")
        messages.error(request, 'Invalid password')
        return redirect('SignIn')

    if request_has_admin_token(request):
        return redirect('dashboard')
    return render(request, "dashboard/login.html", {'form': AdminLoginForm()})


@admin_required
def SignOut(request):
    logger.info("Admin logged out")
    return clear_admin_cookie(redirect("SignIn"))


@admin_required
def dashboard(request):
    restaurants = services.restaurants.select().annotate(dish_count=Count('dishes'))
    return render(request, 'dashboard/index.html', {'restaurants': restaurants})


# =============== RESTAURANTS ===============

@admin_required
def Add_Restaurant(request):
    form = RestaurantForm(request.POST or None, request.FILES or None)
    if request.method == "POST" and form.is_valid():
        fields = form.review_fields()
        upload = form.cleaned_data.get('image')
        new_keys = []
        try:
            if upload:
                new_keys = upload_images([upload])
                fields['image_url'] = new_keys[0]
            restaurant = services.create_restaurant(fields)
        except APIException as e:
            if new_keys:
                blob_store.remove(new_keys)
            form.add_error('image' if not new_keys and upload else None, error_message(e))
        else:
            messages.success(request, f"{restaurant.name} added")
            return redirect('Edit_Restaurant', pk=restaurant.pk)

    return render(request, 'dashboard/restaurant_form.html', {'form': form})


@admin_required
def Edit_Restaurant(request, pk):
    restaurant = find_or_404(services.restaurants, pk)
    # The form writes cleaned data onto its instance; the service needs the stored values
    form = RestaurantForm(request.POST or None, request.FILES or None, instance=copy.copy(restaurant))
    if request.method == "POST" and form.is_valid():
        fields = form.review_fields()
        upload = form.cleaned_data.get('image')
        new_keys = []
        try:
            if upload:
                new_keys = upload_images([upload])
                fields['image_url'] = new_keys[0]
            elif form.cleaned_data.get('clear_image'):
                fields['image_url'] = None
            services.update_restaurant(restaurant, fields)
        except APIException as e:
            if new_keys:
                blob_store.remove(new_keys)
            form.add_error('image' if not new_keys and upload else None, error_message(e))
            # Show the stored record again rather than the rejected edits
            restaurant.refresh_from_db()
        else:
            messages.success(request, 'Restaurant updated successfully')
            return redirect('Edit_Restaurant', pk=restaurant.pk)

    dishes = restaurant.dishes.order_by('-created_at')
    return render(request, 'dashboard/restaurant_form.html', {
        'form': form,
        'restaurant': restaurant,
        'dishes': dishes,
    })


@admin_required
@require_http_methods(["POST"])
def Delete_Restaurant(request, pk):
    restaurant = find_or_404(services.restaurants, pk)
    try:
        storage_errors = services.delete_restaurant(restaurant)
    except APIException as e:
        messages.error(request, f"Could not delete {restaurant.name}: {error_message(e)}")
        return redirect('Edit_Restaurant', pk=pk)

    messages.success(request, f"{restaurant.name} deleted")
    if storage_errors:
        messages.warning(request, f"{len(storage_errors)} image(s) could not be removed from storage")
    return redirect('dashboard')


# =============== DISHES ===============

@admin_required
def Add_Dish(request, pk):
    restaurant = find_or_404(services.restaurants, pk)
    form = DishForm(request.POST or None, request.FILES or None)
    if request.method == "POST" and form.is_valid():
        fields = form.review_fields()
        new_keys = []
        try:
            new_keys = upload_images(form.cleaned_data.get('new_images') or [])
            fields['images'] = new_keys
            fields['restaurant_id'] = restaurant.pk
            services.create_dish(fields)
        except APIException as e:
            if new_keys:
                blob_store.remove(new_keys)
            form.add_error(None, error_message(e))
        else:
            messages.success(request, "Dish review added")
            return redirect('Edit_Restaurant', pk=restaurant.pk)

    return render(request, 'dashboard/dish_form.html', {'form': form, 'restaurant': restaurant})


@admin_required
def Edit_Dish(request, pk):
    dish = find_or_404(services.dishes, pk)
    form = DishForm(request.POST or None, request.FILES or None, instance=copy.copy(dish))
    if request.method == "POST" and form.is_valid():
        fields = form.review_fields()
        kept = form.kept_images()
        new_keys = []
        try:
            new_keys = upload_images(form.cleaned_data.get('new_images') or [])
            fields['images'] = kept + new_keys
            services.update_dish(dish, fields)
        except APIException as e:
            if new_keys:
                blob_store.remove(new_keys)
            form.add_error(None, error_message(e))
            dish.refresh_from_db()
        else:
            messages.success(request, "Dish review updated")
            return redirect('Edit_Restaurant', pk=dish.restaurant_id)

    return render(request, 'dashboard/dish_form.html', {
        'form': form,
        'dish': dish,
        'restaurant': dish.restaurant,
    })


@admin_required
@require_http_methods(["POST"])
def Delete_Dish(request, pk):
    dish = find_or_404(services.dishes, pk)
    restaurant_id = dish.restaurant_id
    try:
        storage_errors = services.delete_dish(dish)
    except APIException as e:
        messages.error(request, f"Could not delete dish: {error_message(e)}")
        return redirect('Edit_Dish', pk=pk)

    messages.info(request, "Dish Deleted....")
    if storage_errors:
        messages.warning(request, f"{len(storage_errors)} image(s) could not be removed from storage")
    return redirect('Edit_Restaurant', pk=restaurant_id)
