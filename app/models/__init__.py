# Alarm backend — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.user import User, Admin                 # noqa
from app.models.alert_type import AlertType             # noqa
from app.models.georeference import Georeference        # noqa
from app.models.siren import Siren                      # noqa
from app.models.alert import Alert, AlertState          # noqa
