from django.apps import AppConfig


class ModerationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.moderation'

    def ready(self):
        import apps.moderation.signals.signals  # noqa: F401
        from apps.moderation.services.targets import register_default_resolvers
        register_default_resolvers()
