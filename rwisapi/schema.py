"""
Response envelope schema and field mappings for the RWIS water quality API.

Every endpoint answers with the same envelope::

    {"response": {"header": {"resultCode": "00", "resultMsg": "..."},
                  "body": {"items": {"item": [...]},
                           "numOfRows": 10, "pageNo": 1, "totalCount": 2}}}
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

SUCCESS_CODE = "00"

# friendly name -> upstream name
WATER_QUALITY_FIELDS = {
    "id": "no",
    "observed": "occrrncDt",
    "facilityName": "fcltyMngNm",
    "facilityId": "fcltyMngNo",
    "facilityAddr": "fcltyAddr",
    "waterType": "liIndDivName",
    "clVal": "clVal",
    "phVal": "phVal",
    "tbVal": "tbVal",
    "updated": "chgDt",
    "phUnit": "phUnit",
    "tbUnit": "tbUnit",
    "clUnit": "clUnit",
}

FACILITY_FIELDS = {
    "facilityName": "fcltyMngNm",
    "code": "sujCode",
}

SUPPLY_LGLD_CODE_FIELDS = {
    "addrName": "addrName",
    "facilityName": "fcltyMngNm",
    "facilityId": "fcltyMngNo",
    "lgIdCode": "lgldCode",
    "lgIdFullAddr": "lgldFullAddr",
    "code": "sujCode",
    "parentLgId": "upprLgldCode",
}

# Values accepted by the ``fcltyDivCode`` option
FACILITY_DIVISIONS = {
    1: "intake station",
    2: "purification plant",
    3: "booster station",
    4: "distribution reservoir",
}

# Values accepted by the ``liIndDiv`` option
WATER_TYPES = {
    1: "domestic",
    2: "industrial",
}


class Header(BaseModel):
    model_config = ConfigDict(extra="allow")

    resultCode: str
    resultMsg: Optional[str] = None

    @field_validator("resultCode", mode="before")
    @classmethod
    def _code_as_text(cls, value):
        return value if value is None else str(value)


class Body(BaseModel):
    """Payload part of the envelope.

    The API sends ``items`` as an empty string when nothing matches and
    ``items.item`` as a bare object when exactly one record matches; both
    are normalised to a list here.
    """

    model_config = ConfigDict(extra="allow")

    items: List[Dict[str, Any]] = []

    @field_validator("items", mode="before")
    @classmethod
    def _unwrap_items(cls, value):
        if not value:
            return []
        if isinstance(value, dict):
            value = value.get("item") or []
        if isinstance(value, dict):
            value = [value]
        return value


class Response(BaseModel):
    model_config = ConfigDict(extra="allow")

    header: Header
    body: Optional[Body] = None


class Envelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    response: Response


def map_items(items, fields):
    """Rename the keys of each upstream item.

    Parameters
    ----------
    items : list of dict
        Upstream records, as found under ``body.items.item``
    fields : dict
        Mapping of friendly name to upstream name

    Returns
    -------
    list of dict
        One record per item, in the same order. Upstream fields missing
        from an item are set to None.
    """
    return [{name: item.get(source) for name, source in fields.items()}
            for item in items]
