from mapedit.edit import EditSession


def test_subscribers_are_notified():
    session = EditSession()
    seen = []
    session.on_change(seen.append)

    session.set_edit_feature('f1')
    session.set_edit_feature(None)
    assert seen == ['f1', None]
    assert session.get_edit_feature() is None


def test_off_change_unsubscribes():
    session = EditSession()
    seen = []
    session.on_change(seen.append)
    session.off_change(seen.append)
    session.set_edit_feature('f1')
    assert seen == []
