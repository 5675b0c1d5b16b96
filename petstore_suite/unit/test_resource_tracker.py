from petstore_suite.api_testing.framework.models import ApiResponse
from petstore_suite.api_testing.framework.resource_tracker import ResourceTracker


class FakeClient:
    def __init__(self, failures=None, raises=None):
        self.deleted = []
        self.failures = failures or set()
        self.raises = raises or set()

    def delete(self, endpoint):
        self.deleted.append(endpoint)
        if endpoint in self.raises:
            raise RuntimeError("connection reset")
        if endpoint in self.failures:
            return ApiResponse(404, {"message": "not found"})
        return ApiResponse(200, {"code": 200})


def test_tracking_ignores_missing_ids():
    tracker = ResourceTracker()
    tracker.track_pet(None)
    tracker.track_order(None)
    tracker.track_user("")

    assert tracker.pending == 0
    assert tracker.cleanup(FakeClient()) == 0


def test_cleanup_deletes_orders_then_pets_then_users():
    tracker = ResourceTracker()
    tracker.track_user("alice")
    tracker.track_pet(10)
    tracker.track_order(20)
    tracker.track_pet(11)
    client = FakeClient()

    failures = tracker.cleanup(client)

    assert failures == 0
    assert client.deleted == [
        "/store/order/20",
        "/pet/10",
        "/pet/11",
        "/user/alice",
    ]
    assert tracker.pending == 0


def test_cleanup_failures_are_counted_not_raised():
    tracker = ResourceTracker()
    tracker.track_pet(1)
    tracker.track_pet(2)
    tracker.track_user("bob")
    client = FakeClient(failures={"/pet/1"}, raises={"/pet/2"})

    failures = tracker.cleanup(client)

    assert failures == 2
    assert client.deleted == ["/pet/1", "/pet/2", "/user/bob"]
    assert tracker.pending == 0


def test_cleanup_escapes_usernames_in_path():
    tracker = ResourceTracker()
    tracker.track_user("user!@#$%")
    client = FakeClient()

    tracker.cleanup(client)

    assert client.deleted == ["/user/user%21%40%23%24%25"]
