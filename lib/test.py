import pytest


class ViewTestMixin(object):
    """
    Automatically load in the app and client, this is common for a lot of
    tests that work with views.
    """

    @pytest.fixture(autouse=True)
    def set_common_fixtures(self, app, client):
        self.app = app
        self.client = client

    @property
    def metrics(self):
        return self.app.extensions["metrics"]

    @property
    def controller(self):
        return self.app.extensions["fault_controller"]
