"""Tests for input masks and date helpers."""

from datetime import date, datetime, timezone

import pytest

from als.utils.ids import new_id
from als.utils.masks import (
    calculate_duration,
    format_br_date,
    mask_cep,
    mask_cnpj,
    mask_cpf,
    mask_phone,
    mask_plate,
    mask_rg,
    mask_seal,
)


@pytest.mark.unit
class TestDocumentMasks:
    """CPF / CNPJ / CEP / RG / phone / plate formatting."""

    def test_cpf_from_digits(self):
        assert mask_cpf("12345678901") == "123.456.789-01"

    def test_cnpj_from_digits(self):
        assert mask_cnpj("12345678000195") == "12.345.678/0001-95"

    def test_cep_from_digits(self):
        assert mask_cep("11010000") == "11010-000"

    @pytest.mark.parametrize("mask,raw", [
        (mask_cpf, "12345678901"),
        (mask_cnpj, "12345678000195"),
        (mask_cep, "11010000"),
        (mask_rg, "123456789"),
        (mask_phone, "13991234567"),
        (mask_plate, "abc1d23"),
    ])
    def test_idempotent_on_masked_input(self, mask, raw):
        masked = mask(raw)
        assert mask(masked) == masked

    def test_partial_input_is_formatted_progressively(self):
        assert mask_cpf("1234") == "123.4"
        assert mask_cpf("1234567") == "123.456.7"
        assert mask_cep("1101") == "1101"

    def test_extra_digits_are_dropped(self):
        assert mask_cpf("123456789012345") == "123.456.789-01"
        assert mask_cep("110100001234") == "11010-000"

    def test_non_digits_are_ignored(self):
        assert mask_cpf("abc123.456.789-01xyz") == "123.456.789-01"

    def test_empty_values(self):
        assert mask_cpf("") == ""
        assert mask_cnpj(None) == ""

    def test_rg(self):
        assert mask_rg("123456789") == "12.345.678-9"

    def test_phone(self):
        assert mask_phone("13991234567") == "(13) 99123-4567"

    def test_plate(self):
        assert mask_plate("abc1d23") == "ABC-1D23"
        assert mask_plate("ABC1234") == "ABC-1234"


@pytest.mark.unit
class TestSealMask:
    """Seal numbers follow the carrier's printed format."""

    def test_msc_keeps_ten_digits(self):
        assert mask_seal("FX 12345678901", "MSC") == "1234567890"

    def test_maersk_family_prefix(self):
        assert mask_seal("12345678", "MAERSK") == "ML-BR12345678"
        assert mask_seal("mlbr12345678", "HAMBURG SUD") == "ML-BR12345678"

    def test_cma_prefix(self):
        assert mask_seal("12345678", "CMA CGM") == "CMA-12345678"
        assert mask_seal("CMA12345678", "CMA CGM") == "CMA-12345678"

    def test_hapag_length(self):
        assert mask_seal("HLD1234567890123", "HAPAG-LLOYD") == "HLD123456789"

    def test_generic_carrier(self):
        assert mask_seal("ab-123", "") == "AB123"

    def test_idempotent(self):
        for carrier in ("MSC", "MAERSK", "CMA CGM", "HAPAG-LLOYD", "ONE"):
            once = mask_seal("12345678", carrier)
            assert mask_seal(once, carrier) == once


@pytest.mark.unit
class TestDates:
    def test_format_br_date(self):
        assert format_br_date("2026-03-05") == "05/03/2026"
        assert format_br_date(date(2026, 12, 31)) == "31/12/2026"
        assert format_br_date("") == ""

    def test_format_br_date_keeps_typed_dates(self):
        assert format_br_date("05/03/2026") == "05/03/2026"
        assert format_br_date("amanha") == "amanha"

    def test_duration(self):
        now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert calculate_duration("2026-01-01T10:58:55Z", now) == "01:01:05"

    def test_duration_never_negative(self):
        now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert calculate_duration("2026-01-01T13:00:00+00:00", now) == "00:00:00"
        assert calculate_duration(None, now) == "00:00:00"
        assert calculate_duration("not a date", now) == "00:00:00"


@pytest.mark.unit
class TestIds:
    def test_prefixed_and_strictly_increasing(self):
        ids = [new_id("drv") for _ in range(50)]
        assert all(i.startswith("drv-") for i in ids)
        stamps = [int(i.split("-")[1]) for i in ids]
        assert stamps == sorted(set(stamps))
