from django.urls import path
from . import views

urlpatterns = [
    path('performance/<str:district_code>', views.district_performance, name='district_performance'),
    path('history/<str:district_code>', views.district_history, name='district_history'),
]
