"""
Dashboard + analytics.

GET /api/dashboard          → compteurs pages / tags
GET /api/analytics/summary  → taps par tag (plus tapés d'abord) + total
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import db_dashboard_counts, db_tap_counts, get_db
from .login import require_editor

router = APIRouter(prefix="/api", tags=["Analytics"], dependencies=[Depends(require_editor)])


@router.get("/dashboard")
def dashboard(db: Session = Depends(get_db)):
    return db_dashboard_counts(db)


@router.get("/analytics/summary")
def analytics_summary(db: Session = Depends(get_db)):
    rows = db_tap_counts(db)
    tags = [
        {
            "id":            tag.id,
            "name":          tag.name,
            "tag_uid":       tag.tag_uid,
            "assigned_page": {"id": tag.assigned_page.id, "name": tag.assigned_page.name} if tag.assigned_page else None,
            "tap_count":     count,
        }
        for tag, count in rows
    ]
    return {"total_taps": sum(t["tap_count"] for t in tags), "tags": tags}
