from django.contrib import admin

from apps.posts.models import Post


# Post Admin -------------------------------------------------------------------------------------
@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ('id', 'author', 'status', 'moderation_due_at', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('author__username', 'body')
    ordering = ('-created_at',)

    # Status moves only through moderation decisions
    readonly_fields = (
        'status', 'status_reason', 'status_entered_at', 'status_prior',
        'moderation_due_at', 'status_decision', 'created_at', 'updated_at',
    )
