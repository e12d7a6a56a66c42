from django.urls import path

from . import views

urlpatterns = [
    path('agencies', views.AgencyListCreateView.as_view(), name='agencies-list'),
    path('agencies/<int:id>', views.AgencyDetailView.as_view(), name='agency-detail'),
    path('agencies/<int:id>/children', views.AgencyChildrenView.as_view(), name='agency-children'),
    path('agencies/<int:id>/parent', views.AgencyParentView.as_view(), name='agency-parent'),
    path('agencies/<int:id>/services-with-rates', views.AgencyServicesWithRatesView.as_view(), name='agency-services-with-rates'),
]
