from functools import wraps
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect
from .models import User

def role_required(role: str):
    """Ensure logged-in user has the given role."""
    def decorator(view_func):
        @login_required
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            user = request.user
            if getattr(user, "role", None) != role:
                messages.error(request, "Access denied.")
                return redirect("home")
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator

recruiter_required = role_required(User.Role.RECRUITER)
job_seeker_required = role_required(User.Role.JOB_SEEKER)
