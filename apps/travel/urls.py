from django.urls import path
from . import views

app_name = 'travel'

urlpatterns = [
    path('settings/', views.rider_settings, name='settings'),

    # Attendance
    path('attendance/', views.attendance_list, name='attendance-list'),
    path('attendance/mark/', views.mark_attendance_view, name='mark-attendance'),

    # Requests
    path('requests/', views.requests_view, name='requests'),
    path('requests/<uuid:request_id>/', views.request_detail, name='request-detail'),
    path('requests/<uuid:request_id>/ignore/', views.ignore_request_view, name='ignore-request'),
]
