from django.contrib import admin
from django.urls import path, include
from jobs import views as job_views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', job_views.home, name='home'),
    path('dashboard/', job_views.dashboard, name='dashboard'),
    path('accounts/', include('accounts.urls')),
    path('jobs/', include('jobs.urls')),
]
