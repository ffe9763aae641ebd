"""
URL configuration for the clinic backend project.

The `urlpatterns` list routes URLs to views.  This module includes
both the Django admin and the API routes provided by the clinic app.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin site, used to maintain the staff and service catalog
    path('admin/', admin.site.urls),
    # Include API routes from the clinic app
    path('', include('clinic.routers')),
]
