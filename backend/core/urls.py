from django.urls import path

from .views import CarrierDetailView, CarrierListCreateView, CarrierUserCreateView

urlpatterns = [
    path('carriers', CarrierListCreateView.as_view(), name='carriers-list'),
    path('carriers/<int:id>', CarrierDetailView.as_view(), name='carrier-detail'),
    path('carriers/<int:id>/users', CarrierUserCreateView.as_view(), name='carrier-users'),
]
