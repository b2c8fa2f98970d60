from core.audit import AuditLog


def test_audit_log_records_user_requirement_and_timestamp():
    log = AuditLog()
    log.record("alice", "hmo_licence", "enabled", True, False)
    assert len(log.entries) == 1
    entry = log.entries[0]
    assert entry.user == "alice"
    assert entry.requirement_id == "hmo_licence"
    assert entry.field == "enabled"
    assert entry.old_value is True
    assert entry.new_value is False
    assert entry.timestamp.tzinfo is not None


def test_audit_log_filters_and_serializes():
    log = AuditLog()
    log.record("alice", "a", "order", 1, 2)
    log.record("bob", "b", "order", 2, 1)
    assert [e.user for e in log.for_requirement("b")] == ["bob"]
    rows = log.as_dict()
    assert rows[0]["requirement"] == "a"
    assert rows[1]["new"] == 1
    assert "T" in rows[0]["timestamp"]
