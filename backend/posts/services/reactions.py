from __future__ import annotations

from collections import Counter

from django.utils import timezone

from posts.models import Post, Reaction

ADDED = "added"
UPDATED = "updated"
REMOVED = "removed"


def toggle_reaction(*, post: Post, user, emoji: str) -> str:
    """
    Add, switch or withdraw `user`'s reaction on `post`.

    Sending the emoji already on record withdraws it; a different emoji
    replaces it. Returns the action that was taken.
    """
    name = user.full_name or "User"
    existing = Reaction.objects.filter(post=post, user=user).first()

    if existing is None:
        Reaction.objects.create(post=post, user=user, emoji=emoji, name=name)
        return ADDED

    if existing.emoji == emoji:
        existing.delete()
        return REMOVED

    existing.emoji = emoji
    existing.name = name
    existing.timestamp = timezone.now()
    existing.save(update_fields=["emoji", "name", "timestamp"])
    return UPDATED


def reaction_counts(reactions) -> dict[str, int]:
    return dict(Counter(reaction.emoji for reaction in reactions))


def reaction_breakdown(reactions) -> dict[str, dict]:
    breakdown: dict[str, dict] = {}
    for reaction in reactions:
        entry = breakdown.setdefault(reaction.emoji, {"count": 0, "users": []})
        entry["count"] += 1
        entry["users"].append(
            {
                "user_id": reaction.user_id,
                "name": reaction.name,
                "timestamp": reaction.timestamp,
            }
        )
    return breakdown


def user_reaction(reactions, user) -> str | None:
    if user is None or not user.is_authenticated:
        return None
    for reaction in reactions:
        if reaction.user_id == user.id:
            return reaction.emoji
    return None
