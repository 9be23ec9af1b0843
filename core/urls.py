"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("charts/<slug:chart_id>/update/", views.chart_update, name="chart_update"),
    path("charts/<slug:chart_id>/legend/toggle/", views.legend_toggle, name="legend_toggle"),
    path("charts/<slug:chart_id>/reset/", views.chart_reset, name="chart_reset"),
]
