from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('core.urls')),
    path('api/v1/', include('accounts.urls')),
    path('api/v1/', include('agencies.urls')),
    path('api/v1/', include('pricing.urls')),
    path('api/v1/', include('orders.urls')),
    path('api/v1/', include('issues.urls')),
]
