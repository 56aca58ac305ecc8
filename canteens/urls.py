from rest_framework_nested import routers

from . import views


router = routers.DefaultRouter()
router.register("canteens", views.CanteenViewSet, basename="canteen")
router.register("menu-items", views.MenuItemViewSet, basename="menu-item")

canteens_router = routers.NestedDefaultRouter(router, "canteens", lookup="canteen")
canteens_router.register("menu-items", views.CanteenMenuItemViewSet, basename="canteen-menu-items")

urlpatterns = router.urls + canteens_router.urls
