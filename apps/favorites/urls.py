"""URL routing for favorites."""

from django.urls import path  # type: ignore

from .views import FavoriteViewSet

favorite_list = FavoriteViewSet.as_view({'get': 'list'})
favorite_detail = FavoriteViewSet.as_view({'post': 'create', 'delete': 'destroy'})
favorite_check = FavoriteViewSet.as_view({'get': 'check'})
favorite_count = FavoriteViewSet.as_view({'get': 'count'})

urlpatterns = [
    path('', favorite_list, name='favorite-list'),
    path('<int:listing_id>/', favorite_detail, name='favorite-detail'),
    path('<int:listing_id>/check/', favorite_check, name='favorite-check'),
    path('<int:listing_id>/count/', favorite_count, name='favorite-count'),
]
