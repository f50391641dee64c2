from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.models.audit_log import AuditLog


async def log_action(
    session: AsyncSession,
    user_id: int | None,
    action: str,
    resource: str,
    resource_id: int | str | None = None,
    details: dict | None = None,
) -> None:
    """Stage an audit row in the caller's transaction."""
    session.add(
        AuditLog(
            user_id=user_id,
            action=action,
            resource=resource,
            resource_id=str(resource_id) if resource_id is not None else None,
            details=details,
        )
    )
    await session.flush()
