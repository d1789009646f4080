# farmacia/presentation/views_auth.py
"""
Views de autenticación con los usuarios de demo.
"""
import logging

from django.views import View
from django.http import HttpResponse
from django.shortcuts import render, redirect
from django.contrib.auth import authenticate, login, logout
from django.views.decorators.http import require_POST

from .forms import LoginForm

logger = logging.getLogger(__name__)

MENSAJE_CREDENCIALES_INVALIDAS = 'Credenciales inválidas. Intente nuevamente.'


class LoginView(View):
    """
    View para la página de login.
    """
    template_name = 'login.html'

    def get(self, request):
        form = LoginForm()
        context = {'form': form}
        return render(request, self.template_name, context)

    def post(self, request):
        form = LoginForm(request.POST)
        if form.is_valid():
            email = form.cleaned_data.get('email')
            password = form.cleaned_data.get('password')
            user = authenticate(request, email=email, password=password)
            if user is not None:
                login(request, user)
                logger.info("Sesión iniciada: %s (%s)", user.email, user.rol)
                return redirect('home')

        context = {'form': form, 'error': MENSAJE_CREDENCIALES_INVALIDAS}
        return render(request, self.template_name, context, status=401)


@require_POST
def logout_usuario(request):
    """
    Cierra la sesión y vuelve al inicio.
    """
    logout(request)
    return redirect('home')


def whoami(request):
    """Diagnóstico en texto plano de la sesión actual."""
    user = request.user
    if user.is_authenticated:
        return HttpResponse(f"Dentro: {user.email} ({user.rol})", content_type='text/plain; charset=utf-8')
    return HttpResponse('No logueado', content_type='text/plain; charset=utf-8')
