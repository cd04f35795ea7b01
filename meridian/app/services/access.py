"""Turns policy verdicts into HTTP rejections, logging every denial."""
import logging

from fastapi import HTTPException, status

from ..domain.policy import CallerIdentity, DenyReason, Verdict

logger = logging.getLogger("meridian.access")

UNAUTHORIZED_DETAIL = "Not authorized to perform this action"
BAD_DATA_DETAIL = "Bad data"


class AccessEnforcer:
    def __init__(self, resource: str) -> None:
        self.resource = resource

    def enforce(self, caller: CallerIdentity, action: str, verdict: Verdict) -> Verdict:
        if verdict.allowed:
            return verdict
        logger.info(
            "denied %s on %s: subject=%s roles=%s reason=%s",
            action,
            self.resource,
            caller.subject or "-",
            ",".join(sorted(caller.roles)) or "-",
            verdict.reason.value if verdict.reason else "-",
        )
        if verdict.reason is DenyReason.BAD_DATA:
            raise HTTPException(status_code=422, detail=BAD_DATA_DETAIL)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_DETAIL,
        )
