from django.urls import path

from .views import ReviewListCreateView, UserReviewListView

urlpatterns = [
    path("", ReviewListCreateView.as_view(), name="review-list"),
    path("mine/", UserReviewListView.as_view(), name="review-mine"),
]
