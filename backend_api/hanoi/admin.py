from django.contrib import admin

from .models import Score


@admin.register(Score)
class ScoreAdmin(admin.ModelAdmin):
    list_display = ("player_name", "level", "score", "moves", "time_in_seconds", "is_optimal", "created_at")
    list_filter = ("level", "is_optimal")
    search_fields = ("player_name",)
    ordering = ("-score", "created_at")
    readonly_fields = ("player_name", "level", "moves", "time_in_seconds", "score", "is_optimal", "created_at")

    # Records are created through the API only and never edited afterwards
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
