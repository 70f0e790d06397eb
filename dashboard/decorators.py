from functools import wraps

from django.shortcuts import redirect
from django.contrib import messages

from authentication.tokens import request_has_admin_token


def admin_required(view_func):
    @wraps(view_func)
    def wrapper_func(request, *args, **kwargs):
        if request_has_admin_token(request):
            return view_func(request, *args, **kwargs)

        messages.info(request, 'Please Login to access this page')
        return redirect('SignIn')

    return wrapper_func
