"""
Scan manager: creator-owned scan tasks bounded by block heights.

Lifecycle:
    pending --start_scan--> in-progress --complete_scan--> completed

Only a scan's creator may move it along. A scan is live while it is
in-progress and active; active is set at creation and never toggled, and
total_transactions stays at zero because nothing increments it.
"""

from __future__ import annotations

import logging

from .config import LedgerConfig
from .errors import ErrorKind, Result
from .events import SCAN_COMPLETED, SCAN_CREATED, SCAN_STARTED, create_event
from .host import CallContext, fits_text, is_uint
from .models import Scan, ScanStatus
from .store import MemoryStore
from .tx_types import VARS

logger = logging.getLogger(__name__)

SCANS = "scans"
SCAN_COUNTER = "scan-counter"


class ScanManager:
    def __init__(self, store: MemoryStore, config: LedgerConfig):
        self.store = store
        self.config = config

    def last_scan_id(self) -> int:
        return self.store.get(VARS, SCAN_COUNTER, 0)

    def create_scan(
        self,
        ctx: CallContext,
        name: str,
        description: str,
        start_height: int,
        end_height: int,
    ) -> Result[int]:
        """Create a pending scan owned by the caller and return its id.

        The range must be non-empty (start < end) and must not start before
        the current height.
        """
        limits = self.config.limits
        if (
            not fits_text(name, limits.scan_name)
            or not fits_text(description, limits.description)
            or not is_uint(start_height)
            or not is_uint(end_height)
        ):
            logger.info("create_scan rejected for %s: %s", ctx.caller, ErrorKind.INVALID_PARAMETERS.value)
            return Result.failure(ErrorKind.INVALID_PARAMETERS)
        if start_height >= end_height or start_height < ctx.height:
            logger.info(
                "create_scan rejected for %s: range [%d, %d) at height %d",
                ctx.caller, start_height, end_height, ctx.height,
            )
            return Result.failure(ErrorKind.INVALID_BLOCK_RANGE)

        with self.store.atomic() as ws:
            scan_id = ws.get(VARS, SCAN_COUNTER, 0) + 1
            scan = Scan(
                scan_id=scan_id,
                name=name,
                description=description,
                creator=ctx.caller,
                start_height=start_height,
                end_height=end_height,
            )
            ws.put(VARS, SCAN_COUNTER, scan_id)
            ws.put(SCANS, scan_id, scan.to_dict())
            ws.emit(create_event(
                SCAN_CREATED,
                ctx,
                payload={"scan_id": scan_id, "start_height": start_height, "end_height": end_height},
            ))
        logger.debug("Created scan %d for %s", scan_id, ctx.caller)
        return Result.success(scan_id)

    def start_scan(self, ctx: CallContext, scan_id: int) -> Result[bool]:
        """Move a scan to in-progress. Restarting an in-progress scan is a no-op success."""
        return self._transition(ctx, scan_id, ScanStatus.IN_PROGRESS, SCAN_STARTED)

    def complete_scan(self, ctx: CallContext, scan_id: int) -> Result[bool]:
        """Move an in-progress scan to completed."""
        return self._transition(ctx, scan_id, ScanStatus.COMPLETED, SCAN_COMPLETED)

    def _transition(
        self,
        ctx: CallContext,
        scan_id: int,
        target: ScanStatus,
        event_type: str,
    ) -> Result[bool]:
        with self.store.atomic() as ws:
            data = ws.get(SCANS, scan_id)
            if data is None:
                logger.info("%s rejected for %s: scan %r not found", event_type, ctx.caller, scan_id)
                return Result.failure(ErrorKind.SCAN_NOT_FOUND)

            scan = Scan.from_dict(data)
            if ctx.caller != scan.creator:
                logger.info("%s rejected for %s: not the creator of scan %d", event_type, ctx.caller, scan_id)
                return Result.failure(ErrorKind.NOT_AUTHORIZED)
            if scan.status is ScanStatus.COMPLETED:
                return Result.failure(ErrorKind.SCAN_ALREADY_COMPLETED)
            if target is ScanStatus.COMPLETED and scan.status is ScanStatus.PENDING:
                return Result.failure(ErrorKind.SCAN_NOT_STARTED)

            ws.put(SCANS, scan_id, scan.with_status(target).to_dict())
            ws.emit(create_event(
                event_type,
                ctx,
                payload={"scan_id": scan_id, "from": scan.status.value, "to": target.value},
            ))
        logger.debug("Scan %d: %s -> %s", scan_id, scan.status.value, target.value)
        return Result.success(True)

    def get_scan(self, scan_id: int) -> Scan | None:
        data = self.store.get(SCANS, scan_id)
        return Scan.from_dict(data) if data is not None else None

    def is_live(self, scan_id: int) -> bool:
        scan = self.get_scan(scan_id)
        return scan is not None and scan.is_live
