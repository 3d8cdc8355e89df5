from sqlalchemy.ext.asyncio import AsyncSession
from app.models.support.activity_models import UserActivity
from app.models.users.user_models import User
from app.constants.activity_templates import ACTIVITY_TEMPLATES
from app.constants.activity_codes import ActivityCode


def actor_role_label(user: User) -> str:
    return user.role.name.capitalize() if user.role else "User"


async def emit_activity(
    db: AsyncSession,
    *,
    actor: User,
    code: ActivityCode,
    client_id: int | None = None,
    **context,
):
    """Stage an audit row in the caller's transaction. The caller commits."""
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    context.setdefault("actor_role", actor_role_label(actor))
    context.setdefault("actor_name", actor.username)

    try:
        message = template.format(**context)
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        UserActivity(
            user_id=actor.id,
            client_id=client_id,
            username_snapshot=actor.username,
            message=message,
        )
    )


def describe_changes(values: dict) -> str:
    if not values:
        return "no changes"
    return ", ".join(f"{key}={value}" for key, value in values.items())
