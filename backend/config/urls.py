from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounts.api import GuideApplicationViewSet, UserListCreateView, UserRoleView
from bookings.api import (
    AssignedTourListView,
    AssignedTourStatusView,
    BookingCancelView,
    BookingCreateView,
    TouristBookingListView,
)
from catalog.api import PackageViewSet
from core.api import welcome
from payments.api import (
    ConfirmPaymentView,
    CreatePaymentIntentView,
    PaymentHistoryView,
    PaymentTransactionListView,
)
from stories.api import StoryViewSet

router = DefaultRouter()
router.register(r"packages", PackageViewSet, basename="package")
router.register(r"stories", StoryViewSet, basename="story")
router.register(r"guide-applications", GuideApplicationViewSet, basename="guide-application")

urlpatterns = [
    path("", welcome, name="welcome"),
    path("admin/", admin.site.urls),
    path("api/users/", UserListCreateView.as_view(), name="user-list"),
    path("api/users/<str:email>/role/", UserRoleView.as_view(), name="user-role"),
    path("api/bookings/", BookingCreateView.as_view(), name="booking-create"),
    path(
        "api/bookings/user/<str:email>/",
        TouristBookingListView.as_view(),
        name="tourist-bookings",
    ),
    path(
        "api/bookings/<str:identifier>/cancel/",
        BookingCancelView.as_view(),
        name="booking-cancel",
    ),
    path(
        "api/assigned-tours/<str:guide_email>/",
        AssignedTourListView.as_view(),
        name="assigned-tours",
    ),
    path(
        "api/assigned-tours/<str:booking_id>/status/",
        AssignedTourStatusView.as_view(),
        name="assigned-tour-status",
    ),
    path(
        "api/payment/create-payment-intent/",
        CreatePaymentIntentView.as_view(),
        name="payment-create-intent",
    ),
    path(
        "api/payment/confirm-payment/",
        ConfirmPaymentView.as_view(),
        name="payment-confirm",
    ),
    path(
        "api/payment/history/<str:identifier>/",
        PaymentHistoryView.as_view(),
        name="payment-history",
    ),
    path("api/payments/", PaymentTransactionListView.as_view(), name="payment-list"),
    path("api/", include(router.urls)),
]
