"""URL configuration for the Emlaknomi project.

The JSON API lives under ``api/v1/`` and keeps the resource paths used by
the public site (``/listings``, ``/cities``, ``/requests/customer``), so
routes are declared without a trailing slash. Everything else is the
server-rendered site and its back office.
"""
from django.conf import settings  # type: ignore
from django.conf.urls.static import static  # type: ignore
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.
api_v1 = [
    path('auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('', include(('apps.locations.urls', 'locations'), namespace='locations')),
    path('', include(('apps.branches.urls', 'branches'), namespace='branches')),
    path('', include(('apps.consultants.urls', 'consultants'), namespace='consultants')),
    path('', include(('apps.listings.urls', 'listings'), namespace='listings')),
    path('', include(('apps.site_settings.urls', 'site-settings'), namespace='site-settings')),
    path('', include(('apps.pages.urls', 'pages'), namespace='pages')),
    path('', include(('apps.leads.urls', 'leads'), namespace='leads')),
]

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/v1/', include(api_v1)),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('', include(('apps.web.urls', 'web'), namespace='web')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
