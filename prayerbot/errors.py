class PrayerBotError(Exception):
    pass


class RemoteFetchFailed(PrayerBotError):
    """A remote JSON document could not be fetched."""


class InvalidResponseStructure(PrayerBotError):
    """A prayer API answered, but not with timings + hijri date."""


class NoActiveApis(PrayerBotError):
    def __init__(self):
        super().__init__("No active APIs configured in the API list")


class AllApisFailed(PrayerBotError):
    def __init__(self, last_error: Exception | None):
        self.last_error = last_error
        super().__init__(f"All APIs failed (last error: {last_error})")
