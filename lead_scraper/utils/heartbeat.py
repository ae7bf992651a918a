from lead_scraper.utils import APP_VERSION_INFO
from lead_scraper.models.heartbeat_models import HeartbeatModel
from lead_scraper.service.resource_manager_service import browser_session_limiter

from lead_scraper.utils.logging import setup_logger
logger = setup_logger(__name__)

async def get_heartbeat() -> HeartbeatModel:
	logger.debug("Heartbeat requested", extra={
		"operation": "heartbeat",
		"app_version": "{}.{}.{}".format(APP_VERSION_INFO.major, APP_VERSION_INFO.minor, APP_VERSION_INFO.patch),
		})
	return HeartbeatModel(
		app_version=APP_VERSION_INFO,
		resources=browser_session_limiter.get_resource_info_dict(),
		)
