"""
A module for implementing a base class for the RWIS Water Quality API (Korea).
"""

import logging
import os

import requests
import pandas as pd
from pydantic import ValidationError

from .exceptions import (
    ConfigurationError,
    MissingOptionError,
    ResultCodeError,
    UnexpectedResponseError,
)
from .schema import (
    Envelope,
    FACILITY_FIELDS,
    SUCCESS_CODE,
    SUPPLY_LGLD_CODE_FIELDS,
    WATER_QUALITY_FIELDS,
    map_items,
)

logger = logging.getLogger(__name__)

ENDPOINT_URI = "http://apis.data.go.kr/B500001/rwis/waterQuality/"
ENV_KEY = "RWIS_SERVICE_KEY"

WATER_QUALITY_PATH = "list"
FACILITY_LIST_PATH = "fcltylist/codelist"
SUPPLY_LGLD_CODE_PATH = "supplyLgldCode/list"

WATER_QUALITY_OPTIONS = ("stDt", "stTm", "edDt", "edTm", "fcltyMngNo",
                         "sujNo", "liIndDiv", "numOfRows", "pageNo")
FACILITY_LIST_OPTIONS = ("fcltyDivCode",)
SUPPLY_LGLD_CODE_OPTIONS = ()


class WaterQuality:
    """Implement GET queries in the RWIS Water Quality API.

    Parameters
    ----------
    key : str
        Service key issued by data.go.kr (the decoded form, it is
        URL-encoded again when the request is sent)
    endpoint : str, optional
        Base URI the operation paths are appended to
    timeout : float, optional
        Timeout for requests, in seconds
    session : requests.Session, optional
        Session used to send requests. A new one is created if omitted.
    """
    HEADERS = {"accept": "application/json"}

    def __init__(self, key, endpoint=ENDPOINT_URI, timeout=None, session=None):
        if not key or not isinstance(key, str):
            raise ConfigurationError("Key isn't given")
        self._key = key
        self._endpoint = endpoint
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @property
    def key(self):
        return self._key

    @property
    def endpoint(self):
        return self._endpoint

    def close(self):
        """Close the session, if it was created by this client."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @classmethod
    def from_env(cls, **kwargs):
        """Build a client with the key stored in ``RWIS_SERVICE_KEY``."""
        key = os.environ.get(ENV_KEY)
        if not key:
            raise ConfigurationError(f"Key isn't given: set {ENV_KEY}")
        return cls(key, **kwargs)

    def _get_complete_url(self, path):
        return f"{self.endpoint}{path}"

    def _request(self, path, params=None):
        url = self._get_complete_url(path)
        query = dict(params or {})
        query["serviceKey"] = self.key
        query["_type"] = "json"
        logger.debug("GET %s %s", url, {**query, "serviceKey": "***"})

        response = self.session.get(url,
                                    params=query,
                                    headers=WaterQuality.HEADERS,
                                    timeout=self.timeout
                                    )
        response.raise_for_status()
        response.encoding = "utf-8"
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Non-JSON response from %s: %.200s", path, response.text)
            raise UnexpectedResponseError(
                f"Unexpected response shape from '{path}': body is not JSON"
            ) from exc
        return self._unwrap(path, data)

    def _unwrap(self, path, data):
        """Validate the envelope and return its body.

        Raises
        ------
        UnexpectedResponseError
            If ``response``, ``header`` or ``body`` is missing or malformed
        ResultCodeError
            If ``header.resultCode`` is not "00"
        """
        try:
            envelope = Envelope.model_validate(data)
        except ValidationError as exc:
            logger.error("Malformed envelope from %s: %s", path, exc)
            raise UnexpectedResponseError(
                f"Unexpected response shape from '{path}'"
            ) from exc

        if envelope.response.body is None:
            logger.error("Envelope from %s has no body", path)
            raise UnexpectedResponseError(
                f"Unexpected response shape from '{path}': missing body"
            )

        header = envelope.response.header
        if header.resultCode != SUCCESS_CODE:
            logger.error("Result code %s from %s: %s",
                         header.resultCode, path, header.resultMsg)
            raise ResultCodeError(header.resultCode, header.resultMsg)
        return envelope.response.body

    @staticmethod
    def _verify_option(keys, options):
        """Check that every key in `keys` is present in `options`.

        Only presence is checked, values may be None or empty.

        Raises
        ------
        MissingOptionError
            For the first key not found
        """
        for key in keys:
            if key not in options:
                raise MissingOptionError(key)

    def get_water_quality(self, **options):
        """Get water quality measurements of a facility over a time range.

        Parameters
        ----------
        **options
            stDt: str, start date (ex: "2017-08-31")
            stTm: str or int, start hour (ex: "00")
            edDt: str, end date
            edTm: str or int, end hour (ex: "24")
            fcltyMngNo: str or int, facility management number
            sujNo: str or int, site code
            liIndDiv: {1, 2}, domestic or industrial water
            numOfRows: int, rows per page
            pageNo: int, page number
            All of them must be given.

        Returns
        -------
        list of dict
            Keys: id, observed, facilityName, facilityId, facilityAddr,
            waterType, clVal, phVal, tbVal, updated, phUnit, tbUnit, clUnit
        """
        self._verify_option(WATER_QUALITY_OPTIONS, options)
        body = self._request(WATER_QUALITY_PATH, options)
        return map_items(body.items, WATER_QUALITY_FIELDS)

    def get_facility_list(self, **options):
        """Get the facilities of a division.

        Parameters
        ----------
        **options
            fcltyDivCode: {1, 2, 3, 4}, required. See ``FACILITY_DIVISIONS``.

        Returns
        -------
        list of dict
            Keys: facilityName, code
        """
        self._verify_option(FACILITY_LIST_OPTIONS, options)
        body = self._request(FACILITY_LIST_PATH, options)
        return map_items(body.items, FACILITY_FIELDS)

    def get_supply_lgid_code_list(self, **options):
        """Get the legal-dong codes of the areas each facility supplies.

        Returns
        -------
        list of dict
            Keys: addrName, facilityName, facilityId, lgIdCode,
            lgIdFullAddr, code, parentLgId
        """
        self._verify_option(SUPPLY_LGLD_CODE_OPTIONS, options)
        body = self._request(SUPPLY_LGLD_CODE_PATH, options)
        return map_items(body.items, SUPPLY_LGLD_CODE_FIELDS)

    def water_quality(self, **options):
        '''Return dataframe with water quality measurements.

        Measured values are numeric and dates are timestamps.
        '''
        records = self.get_water_quality(**options)
        df = pd.DataFrame(records, columns=list(WATER_QUALITY_FIELDS))

        for column in ("clVal", "phVal", "tbVal"):
            df[column] = pd.to_numeric(df[column], errors="coerce")
        for column in ("observed", "updated"):
            df[column] = pd.to_datetime(df[column].astype(str),
                                        format="%Y%m%d%H", errors="coerce")
        return df

    def facilities(self, fclty_div_code):
        '''Return dataframe with facilities of a division.
        '''
        records = self.get_facility_list(fcltyDivCode=fclty_div_code)
        return pd.DataFrame(records, columns=list(FACILITY_FIELDS))

    def supply_areas(self):
        '''Return dataframe with supplied areas and their legal-dong codes.
        '''
        records = self.get_supply_lgid_code_list()
        return pd.DataFrame(records, columns=list(SUPPLY_LGLD_CODE_FIELDS))
