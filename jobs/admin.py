from django.contrib import admin
from .models import Job, Application, ApplicationEvent


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ("title", "recruiter", "company", "status", "location_type", "employment_type", "created_at")
    list_filter = ("status", "location_type", "employment_type")
    search_fields = ("title", "description")


class ApplicationEventInline(admin.TabularInline):
    model = ApplicationEvent
    extra = 0
    readonly_fields = ("status", "previous_status", "actor", "note", "created_at")


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ("job", "applicant", "status", "created_at")
    list_filter = ("status",)
    inlines = [ApplicationEventInline]
