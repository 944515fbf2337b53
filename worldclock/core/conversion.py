"""One-shot "convert this wall time from zone A to zone B" requests."""
import logging
from typing import Optional, Union

from worldclock.core.schemas import ConversionResult
from worldclock.core.time_utils import (
    DateInput,
    Disambiguation,
    FieldSet,
    TimeInput,
    from_instant,
    to_instant,
    wall_time_kind,
)
from worldclock.core.zones import friendly_name

logger = logging.getLogger(__name__)


class ConversionRequestHandler:
    """Converts a wall-clock reading between two zones.

    Converter errors (InvalidZoneError, InvalidDateError) are not caught
    here; the caller decides how to present them.
    """

    def __init__(self, fields: FieldSet = FieldSet.FULL):
        self.fields = fields

    def convert(
        self,
        date_value: Optional[DateInput],
        time_value: TimeInput,
        from_zone: Optional[str],
        to_zone: Optional[str],
        disambiguation: Union[Disambiguation, str] = Disambiguation.EARLIER,
    ) -> Optional[ConversionResult]:
        """Return the conversion, or None when the form is incomplete."""
        if not date_value or not time_value or not from_zone or not to_zone:
            logger.debug("Conversion skipped: form incomplete")
            return None

        instant = to_instant(date_value, time_value, from_zone, disambiguation)
        rendered = from_instant(instant, to_zone, self.fields)

        return ConversionResult(
            instant=instant,
            rendered_in_target=rendered,
            source_text=f"{date_value} {time_value}",
            from_zone=from_zone,
            to_zone=to_zone,
            from_label=friendly_name(from_zone),
            to_label=friendly_name(to_zone),
            wall_time=wall_time_kind(date_value, time_value, from_zone),
        )
