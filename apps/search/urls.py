"""URL routing for listing search."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PopularListingsView, SearchListingsView, SuggestedListingsView

urlpatterns = [
    path("", SearchListingsView.as_view(), name="search"),
    path("popular/", PopularListingsView.as_view(), name="search-popular"),
    path("suggested/", SuggestedListingsView.as_view(), name="search-suggested"),
]
