from lead_scraper import __version__
from lead_scraper.models.heartbeat_models import VersionInfo

def load_app_version_info() -> VersionInfo:
    ### Version string is "major.minor.patch" with an optional "-suffix".
    version, _, suffix = __version__.partition("-")
    major, minor, patch = (int(part) for part in version.split("."))

    return VersionInfo(major=major, minor=minor, patch=patch, suffix=suffix)

APP_VERSION_INFO = load_app_version_info()
