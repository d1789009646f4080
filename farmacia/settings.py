"""
Configuración del proyecto Farmacia.
"""

from decouple import config, Csv
from pathlib import Path
from django.contrib.messages import constants as messages

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURACIÓN BÁSICA
# ====================================================================

# La SECRET_KEY se lee desde una variable de entorno por seguridad.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-dev-secret')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())

# Modelo de usuario con email como login.
AUTH_USER_MODEL = 'infrastructure.Usuario'


# ====================================================================
# APLICACIONES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Aplicaciones de Terceros
    'rest_framework',
    'drf_spectacular',
    'rest_framework_simplejwt',

    # Nuestras Aplicaciones (en este orden por las referencias entre Models)
    'farmacia.core.apps.CoreConfig', # Entidades y Lógica Pura
    'farmacia.infrastructure.apps.InfrastructureConfig', # Usuarios, Newsletter y Repositorios
    'farmacia.catalog.apps.CatalogConfig', # Catálogo de Productos
    'farmacia.presentation.apps.PresentationConfig', # Views, Forms, Templates
]


# ====================================================================
# MIDDLEWARE Y TEMPLATES
# ====================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'farmacia.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'farmacia' / 'presentation' / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',

                # Cantidad de unidades en el carrito para el menú
                'farmacia.presentation.context_processors.carrito_context',
            ],
        },
    },
]

WSGI_APPLICATION = 'farmacia.wsgi.application'


# ====================================================================
# BASE DE DATOS
# ====================================================================

DB_ENGINE = config('DB_ENGINE', default='sqlite3')

if DB_ENGINE == 'postgresql':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': config('DB_NAME', default='farmacia'),
            'USER': config('DB_USER', default='farmacia'),
            'PASSWORD': config('DB_PASSWORD', default=''),
            'HOST': config('DB_HOST', default='localhost'),
            'PORT': config('DB_PORT', default=5432, cast=int),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'farmacia.db')),
        }
    }


# ====================================================================
# ESTADO VOLÁTIL (carritos, direcciones, reservas)
# ====================================================================

# 'memoria' (diccionario del proceso) o 'cache' (framework de caché de Django)
FARMACIA_ESTADO_BACKEND = config('FARMACIA_ESTADO_BACKEND', default='memoria')
FARMACIA_ESTADO_CACHE_ALIAS = config('FARMACIA_ESTADO_CACHE_ALIAS', default='default')

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'farmacia-estado',
    }
}


# ====================================================================
# AUTENTICACIÓN
# ====================================================================

# Usuarios de demo (contraseñas en texto plano, solo para la demo)
FARMACIA_USUARIOS_DEMO = [
    {'email': 'admin@demo.cl', 'password': '123456', 'rol': 'ADMIN'},
    {'email': 'user@demo.cl', 'password': '123456', 'rol': 'USUARIO'},
]

AUTHENTICATION_BACKENDS = [
    'farmacia.infrastructure.auth_backends.UsuarioDemoBackend',
    # Superusuarios creados con createsuperuser (admin de Django)
    'django.contrib.auth.backends.ModelBackend',
]

LOGIN_URL = '/login/'
LOGIN_REDIRECT_URL = '/'
LOGOUT_REDIRECT_URL = '/'


# ====================================================================
# INTERNACIONALIZACIÓN
# ====================================================================

LANGUAGE_CODE = 'es-cl'

TIME_ZONE = 'America/Santiago'

USE_I18N = True

USE_TZ = True


# ====================================================================
# ARCHIVOS ESTÁTICOS
# ====================================================================

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# DJANGO REST FRAMEWORK (DRF) Y DOCS (SPECTACULAR)
# ====================================================================

SPECTACULAR_SETTINGS = {
    'TITLE': 'API de la Farmacia',
    'DESCRIPTION': 'Catálogo, carrito, reservas y direcciones de la farmacia demo.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

REST_FRAMEWORK = {
    # JWT para clientes de la API, SessionAuth para el navegador.
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}


# ====================================================================
# LOGGING
# ====================================================================

LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOG_FILE = config('LOG_FILE', default='')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'farmacia': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': LOG_LEVEL,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOG_FILE,
        'maxBytes': 1024 * 1024 * 5,  # 5 MB
        'backupCount': 5,
        'formatter': 'verbose',
    }
    for logger_config in LOGGING['loggers'].values():
        logger_config['handlers'].append('file')

# --- Mensajes (estilo Tailwind) ---
MESSAGE_TAGS = {
    messages.DEBUG: 'bg-gray-800 text-white',
    messages.INFO: 'bg-blue-500 text-white',
    messages.SUCCESS: 'bg-green-500 text-white',
    messages.WARNING: 'bg-yellow-500 text-white',
    messages.ERROR: 'bg-red-500 text-white',
}
