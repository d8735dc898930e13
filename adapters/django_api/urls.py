"""
Khata Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("rows/<str:row_id>/", views.store_row_view),
]
