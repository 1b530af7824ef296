"""Tests for the emergency transport directory."""

from __future__ import annotations

import logging

from neomama.models import TransportType
from neomama.transport import (
    EMERGENCY_LINE,
    SERVICE_TYPE_LABELS,
    TRANSPORT_SERVICES,
    call_service,
    filter_services,
    get_service,
    services_covering,
)


class TestFilter:
    def test_all(self) -> None:
        assert len(filter_services()) == len(TRANSPORT_SERVICES) == 6

    def test_by_type(self) -> None:
        ambulances = filter_services(TransportType.AMBULANCE.value)
        assert {s.id for s in ambulances} == {"1", "3"}
        assert all(s.type == TransportType.AMBULANCE for s in ambulances)

    def test_unknown_type_is_empty(self) -> None:
        assert filter_services("helicopter") == []

    def test_label_keys_are_filterable(self) -> None:
        for key in SERVICE_TYPE_LABELS:
            assert filter_services(key)
        assert filter_services(TransportType.PRIVATE.value)


class TestCoverage:
    def test_case_insensitive_substring(self) -> None:
        ids = {s.id for s in services_covering("nairobi")}
        assert ids == {"1", "3", "4", "5", "6"}

    def test_combined_with_type(self) -> None:
        hospital = filter_services(TransportType.HOSPITAL_TRANSPORT.value)
        assert [s.id for s in services_covering("Kisumu", hospital)] == ["4"]


class TestCall:
    def test_get_service(self) -> None:
        service = get_service("2")
        assert service is not None
        assert service.name == "AMREF Flying Doctors"
        assert get_service("99") is None

    def test_call_is_logged(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="neomama.transport"):
            assert call_service("0700 000 000", "Test Ambulance") == "0700 000 000"
        assert "Test Ambulance" in caplog.text

    def test_emergency_line(self) -> None:
        assert EMERGENCY_LINE == "1190"
