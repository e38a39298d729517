from django.contrib import admin
from django.urls import path, include

from apps.performance.views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health', health_check, name='health'),
    path('api/', include('apps.districts.urls')),
    path('api/', include('apps.performance.urls')),
    path('', include('apps.dashboard.urls')),
]
