from django.contrib import admin

from content.models import Event, FacultyMember, HistoryEvent, NewsArticle, Program, TeamMember, UniversityCourse, Video


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['title', 'date', 'time', 'location', 'is_past']
    list_filter = ['is_past']
    search_fields = ['title', 'location']


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'slug', 'updated_at']
    list_filter = ['category']
    search_fields = ['title', 'slug']
    prepopulated_fields = {'slug': ('title',)}


@admin.register(NewsArticle)
class NewsArticleAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'author', 'date']
    list_filter = ['category']
    search_fields = ['title', 'author', 'slug']
    prepopulated_fields = {'slug': ('title',)}


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'date', 'views', 'is_featured', 'is_main_feature']
    list_filter = ['category', 'is_featured']
    search_fields = ['title']
    readonly_fields = ['views']


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ['name', 'title', 'is_leadership']
    list_filter = ['is_leadership']
    search_fields = ['name', 'title']


@admin.register(HistoryEvent)
class HistoryEventAdmin(admin.ModelAdmin):
    list_display = ['year', 'title', 'sort_order']
    ordering = ['year', 'sort_order']


admin.site.register(UniversityCourse)
admin.site.register(FacultyMember)
