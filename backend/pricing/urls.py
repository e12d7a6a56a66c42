from django.urls import path

from . import views

urlpatterns = [
    path('shipping-rates', views.ShippingRateCreateView.as_view(), name='shipping-rate-create'),
    path('shipping-rates/<int:id>', views.ShippingRateDetailView.as_view(), name='shipping-rate-detail'),
    path('shipping-rates/<int:id>/status', views.ShippingRateStatusView.as_view(), name='shipping-rate-status'),
    path(
        'shipping-rates/service/<int:service_id>/agency/<int:agency_id>',
        views.RatesByServiceAndAgencyView.as_view(),
        name='shipping-rates-by-service-agency',
    ),
    path('pricing/products/<int:product_id>/agreements', views.ProductAgreementsView.as_view(), name='product-agreements'),
    path('pricing/agencies/<int:agency_id>/agreements', views.AgencyAgreementsView.as_view(), name='agency-agreements'),
    path('delivery-rates/resolve', views.DeliveryRateResolveView.as_view(), name='delivery-rate-resolve'),
]
