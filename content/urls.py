from django.urls import path
from . import apis

app_name = 'content'
urlpatterns = [
    path('events', apis.EventListCreateView.as_view(), name='events'),
    path('events/upcoming', apis.UpcomingEventListView.as_view(), name='events-upcoming'),
    path('events/past', apis.PastEventListView.as_view(), name='events-past'),
    path('events/<int:id>', apis.EventDetailView.as_view(), name='event-detail'),

    path('programs', apis.ProgramListCreateView.as_view(), name='programs'),
    path('programs/featured', apis.FeaturedProgramListView.as_view(), name='programs-featured'),
    path('programs/categories', apis.ProgramCategoryListView.as_view(), name='program-categories'),
    # numeric paths address a program by id, anything else by slug
    path('programs/<int:id>', apis.ProgramDetailView.as_view(), name='program-detail'),
    path('programs/<slug:slug>', apis.ProgramBySlugView.as_view(), name='program-by-slug'),

    path('news', apis.NewsArticleListCreateView.as_view(), name='news'),
    path('news/featured', apis.FeaturedNewsListView.as_view(), name='news-featured'),
    path('news/categories', apis.NewsCategoryListView.as_view(), name='news-categories'),
    path('news/<int:id>', apis.NewsArticleDetailView.as_view(), name='news-detail'),
    path('news/<slug:slug>', apis.NewsArticleBySlugView.as_view(), name='news-by-slug'),

    path('videos', apis.VideoListCreateView.as_view(), name='videos'),
    path('videos/featured', apis.FeaturedVideoListView.as_view(), name='videos-featured'),
    path('videos/main-feature', apis.MainFeatureVideoView.as_view(), name='videos-main-feature'),
    path('videos/categories', apis.VideoCategoryListView.as_view(), name='video-categories'),
    path('videos/<int:id>', apis.VideoDetailView.as_view(), name='video-detail'),

    path('team', apis.TeamMemberCreateView.as_view(), name='team-create'),
    path('team/all', apis.TeamMemberListView.as_view(), name='team-all'),
    path('team/leadership', apis.LeadershipTeamListView.as_view(), name='team-leadership'),
    path('team/<int:id>', apis.TeamMemberDetailView.as_view(), name='team-detail'),

    path('about/history', apis.HistoryEventListCreateView.as_view(), name='history'),
    path('about/history/<int:id>', apis.HistoryEventDetailView.as_view(), name='history-detail'),

    path('university/courses', apis.UniversityCourseListCreateView.as_view(), name='courses'),
    path('university/courses/<int:id>', apis.UniversityCourseDetailView.as_view(), name='course-detail'),
    path('university/faculty', apis.FacultyMemberListCreateView.as_view(), name='faculty'),
    path('university/faculty/<int:id>', apis.FacultyMemberDetailView.as_view(), name='faculty-detail'),
]
