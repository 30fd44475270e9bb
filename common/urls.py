#only put app wide configuration or functionality here, no urls for individual apps should be put here

from django.urls import path
from . import apis

app_name = 'common'
urlpatterns = [
    path('settings', apis.SiteSettingListCreateView.as_view(), name='settings'),
    path('settings/<str:identifier>', apis.SiteSettingDetailView.as_view(), name='setting-detail'),
    path('admin/stats', apis.AdminStatsView.as_view(), name='admin-stats'),
]
