from django.urls import path

from .apis import (
    BulkDeleteSubscribersView,
    ContactMessageDetailView,
    ContactMessageListCreateView,
    ContactMessageReadView,
    DonationListCreateView,
    DonationStatusView,
    NewsletterSubscriberDetailView,
    NewsletterSubscriberListView,
    SubscribeToNewsletterView,
    VolunteerListCreateView,
    VolunteerStatusView,
)

app_name = 'engagement'

urlpatterns = [
    path('volunteers', VolunteerListCreateView.as_view(), name='volunteers'),
    path('volunteers/<int:id>/status', VolunteerStatusView.as_view(), name='volunteer-status'),
    path('donations', DonationListCreateView.as_view(), name='donations'),
    path('donations/<int:id>/status', DonationStatusView.as_view(), name='donation-status'),
    path('contact', ContactMessageListCreateView.as_view(), name='contact'),
    path('contact/<int:id>/read', ContactMessageReadView.as_view(), name='contact-read'),
    path('contact/<int:id>', ContactMessageDetailView.as_view(), name='contact-detail'),
    path('newsletter/subscribe', SubscribeToNewsletterView.as_view(), name='newsletter-subscribe'),
    path('newsletter/subscribers', NewsletterSubscriberListView.as_view(), name='newsletter-subscribers'),
    path('newsletter/subscribers/bulk', BulkDeleteSubscribersView.as_view(), name='newsletter-bulk-delete'),
    path('newsletter/subscribers/<int:id>', NewsletterSubscriberDetailView.as_view(), name='newsletter-subscriber-detail'),
]
