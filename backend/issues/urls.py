from django.urls import path

from .views import IssueDetailView, IssueListCreateView, IssueResolveView

urlpatterns = [
    path('issues', IssueListCreateView.as_view(), name='issues-list'),
    path('issues/<int:id>', IssueDetailView.as_view(), name='issue-detail'),
    path('issues/<int:id>/resolve', IssueResolveView.as_view(), name='issue-resolve'),
]
