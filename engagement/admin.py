from django.contrib import admin

from engagement.models import ContactMessage, Donation, NewsletterSubscriber, Volunteer


@admin.register(Volunteer)
class VolunteerAdmin(admin.ModelAdmin):
    list_display = ['first_name', 'last_name', 'email', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['first_name', 'last_name', 'email']


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = ['first_name', 'last_name', 'amount', 'payment_method', 'recurring', 'status', 'created_at']
    list_filter = ['status', 'recurring']
    search_fields = ['email', 'transaction_id']


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ['subject', 'name', 'email', 'is_read', 'created_at']
    list_filter = ['is_read']
    search_fields = ['subject', 'email']


@admin.register(NewsletterSubscriber)
class NewsletterSubscriberAdmin(admin.ModelAdmin):
    list_display = ['email', 'created_at']
    search_fields = ['email']
    readonly_fields = ['created_at']
