from django.urls import path

from .views import OrderStatusSummaryView, ParcelListView, ParcelStatusView

urlpatterns = [
    path('orders/<int:id>/status-summary', OrderStatusSummaryView.as_view(), name='order-status-summary'),
    path('parcels', ParcelListView.as_view(), name='parcels-list'),
    path('parcels/<str:hbl>/status', ParcelStatusView.as_view(), name='parcel-status'),
]
