"""Tests for the member notification center API."""

from conftest import MEMBER_ID
from churchapp.models.notification import Notification
from churchapp.services.notifications import add_notification, has_unread_mentioning

ME = {"X-User-Id": MEMBER_ID}


def seed(db, user_id=MEMBER_ID, count=3):
    rows = [
        add_notification(db, user_id=user_id, title=f"Reminder {i}", message=f"Serve as Usher #{i}", metadata={"n": i})
        for i in range(count)
    ]
    db.commit()
    return rows


class TestHasUnreadMentioning:
    def test_matches_substring(self, db):
        seed(db, count=1)
        assert has_unread_mentioning(db, MEMBER_ID, "duty_reminder", "Usher") is True
        assert has_unread_mentioning(db, MEMBER_ID, "duty_reminder", "Choir") is False

    def test_percent_is_literal(self, db):
        seed(db, count=1)
        assert has_unread_mentioning(db, MEMBER_ID, "duty_reminder", "%") is False


class TestListNotifications:
    def test_requires_identity(self, client):
        assert client.get("/api/notifications").status_code == 401

    def test_lists_own_only(self, client, db):
        seed(db)
        seed(db, user_id="someone-else", count=2)
        body = client.get("/api/notifications", headers=ME).json()
        assert len(body["notifications"]) == 3
        assert body["unread_count"] == 3
        first = body["notifications"][0]
        assert first["read"] is False
        assert first["type"] == "duty_reminder"
        assert "n" in first["metadata"]

    def test_unread_only_and_limit(self, client, db):
        rows = seed(db)
        rows[0].is_read = True
        db.commit()
        body = client.get("/api/notifications", headers=ME, params={"unread_only": True}).json()
        assert len(body["notifications"]) == 2
        assert body["unread_count"] == 2
        body = client.get("/api/notifications", headers=ME, params={"limit": 1}).json()
        assert len(body["notifications"]) == 1


class TestMarkRead:
    def test_mark_one(self, client, db):
        rows = seed(db, count=2)
        nid = rows[0].id
        resp = client.patch(f"/api/notifications/{nid}/read", headers=ME)
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "id": nid}
        db.expire_all()
        assert db.get(Notification, nid).is_read is True
        assert db.get(Notification, rows[1].id).is_read is False

    def test_other_users_notification_is_404(self, client, db):
        (row,) = seed(db, user_id="someone-else", count=1)
        resp = client.patch(f"/api/notifications/{row.id}/read", headers=ME)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Notification not found"}

    def test_mark_all(self, client, db):
        seed(db)
        seed(db, user_id="someone-else", count=1)
        resp = client.post("/api/notifications/mark-all-read", headers=ME)
        assert resp.json() == {"ok": True, "marked_count": 3}
        db.expire_all()
        assert db.query(Notification).filter(Notification.is_read.is_(False)).count() == 1
