from django.contrib import admin
from django.contrib.auth import get_user_model

CustomUser = get_user_model()


# CUSTOM USER Admin ---------------------------------------------------------------------
@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    list_display = ['email', 'username', 'role', 'trust_score', 'status', 'moderation_due_at', 'is_active', 'is_admin', 'register_date']
    list_filter = ['status', 'role', 'is_active', 'is_admin', 'register_date']
    list_editable = ['trust_score']
    search_fields = ['username', 'email', 'name']
    ordering = ['-register_date']
    # Lifecycle fields are written only through moderation decisions
    readonly_fields = [
        'register_date', 'last_login',
        'status', 'status_reason', 'status_entered_at', 'moderation_due_at', 'status_prior', 'status_decision',
        'reactivated_at', 'unblock_code', 'unblock_code_expiry', 'unblock_password_verified_at',
    ]
    fieldsets = (
        ('Account Info', {'fields': ('email', 'username', 'name', 'bio', 'register_date', 'last_login')}),
        ('Trust', {'fields': ('role', 'trust_score')}),
        ('Lifecycle', {'fields': ('status', 'status_reason', 'status_entered_at', 'moderation_due_at', 'status_prior', 'status_decision', 'reactivated_at')}),
        ('Unblock Verification', {'fields': ('unblock_password_verified_at', 'unblock_code_expiry')}),
        ('Permissions', {'fields': ('is_active', 'is_admin', 'is_superuser', 'groups', 'user_permissions')}),
    )
    filter_horizontal = ('groups', 'user_permissions')
