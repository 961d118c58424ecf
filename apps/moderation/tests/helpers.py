# apps/moderation/tests/helpers.py

import itertools

from django.contrib.auth import get_user_model

from apps.accounts.constants import ROLE_MODERATOR
from apps.posts.models import Post

CustomUser = get_user_model()

_seq = itertools.count(1)


def make_user(trust_score=0, **extra):
    n = next(_seq)
    extra.setdefault("username", f"user{n}")
    return CustomUser.objects.create_user(
        email=f"user{n}@example.com",
        password="pass-1234",
        trust_score=trust_score,
        **extra,
    )


def make_moderator(**extra):
    extra.setdefault("role", ROLE_MODERATOR)
    return make_user(trust_score=100, **extra)


def make_post(author=None, body="Hello world"):
    return Post.objects.create(author=author or make_user(), body=body)
