from django.shortcuts import redirect
from django.contrib.auth import logout
from django.contrib.auth.decorators import login_required
from django.http import HttpResponseForbidden


def _require_admin(request):
    if not request.user.is_staff:
        return None, HttpResponseForbidden(
            "Akun ini bukan administrator program MBKM."
        )
    return request.user, None


def portal_logout(request):
    logout(request)
    return redirect("portal:login")


@login_required
def after_login(request):
    _, error = _require_admin(request)
    if error:
        return error
    return redirect("portal:dashboard")
