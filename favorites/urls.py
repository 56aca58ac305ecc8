from django.urls import path

from .views import FavoriteCheckView, FavoriteListCreateView, FavoriteToggleView

urlpatterns = [
    path('', FavoriteListCreateView.as_view(), name='favorites'),
    path('check/', FavoriteCheckView.as_view(), name='favorites-check'),
    path('toggle/', FavoriteToggleView.as_view(), name='favorites-toggle'),
]
