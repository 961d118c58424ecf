import os
from celery import Celery
from celery.schedules import crontab


os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'trustmod.settings')
app = Celery('trustmod')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()


# Define all beat schedules in one dictionary
app.conf.beat_schedule = {
    # Restore content / accounts whose 48h review window expired
    'restore-overdue-moderation-every-hour': {
        'task': 'apps.moderation.tasks.restore_overdue_moderation',
        'schedule': crontab(minute=0),
    },

    # Hard-delete accounts past the deletion grace window
    'purge-deleted-accounts-every-day': {
        'task': 'apps.accounts.tasks.purge_deleted_accounts',
        'schedule': crontab(hour=3, minute=0),
    },

    # Drop closed reports older than 30 days
    'purge-closed-reports-every-day': {
        'task': 'apps.moderation.tasks.purge_closed_reports',
        'schedule': crontab(hour=3, minute=30),
    },

    # Drop moderation log entries older than 90 days
    'purge-moderation-logs-every-week': {
        'task': 'apps.moderation.tasks.purge_moderation_logs',
        'schedule': crontab(hour=4, minute=0, day_of_week='sunday'),
    },
}


# celery -A trustmod worker -l info
# celery -A trustmod beat -l info
