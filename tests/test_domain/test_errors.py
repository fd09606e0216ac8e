"""
Tests for typed domain errors.

Verifies that each error class exists, inherits correctly,
and carries the right attributes for downstream handling.
"""


class TestDomainErrorHierarchy:
    """All domain errors inherit from a common base."""

    def test_base_error_exists(self):
        from life_weeks.domain.errors import DomainError

        assert issubclass(DomainError, Exception)

    def test_base_error_carries_message(self):
        from life_weeks.domain.errors import DomainError

        err = DomainError("something broke")
        assert str(err) == "something broke"


class TestStatisticsErrors:
    def test_invalid_input(self):
        from life_weeks.domain.errors import DomainError, InvalidInput

        assert issubclass(InvalidInput, DomainError)
        assert issubclass(InvalidInput, ValueError)
        err = InvalidInput("bad birthdate", value="2025-13-45")
        assert err.value == "2025-13-45"
        assert "bad birthdate" in str(err)


class TestGridErrors:
    def test_index_out_of_range(self):
        from life_weeks.domain.errors import DomainError, IndexOutOfRange

        assert issubclass(IndexOutOfRange, DomainError)
        assert issubclass(IndexOutOfRange, IndexError)
        err = IndexOutOfRange(week_index=4680, total_weeks=4680)
        assert err.week_index == 4680
        assert err.total_weeks == 4680
        assert "4680" in str(err)


class TestExportErrors:
    def test_image_export_failure(self):
        from life_weeks.domain.errors import DomainError, ImageExportFailure

        assert issubclass(ImageExportFailure, DomainError)
        err = ImageExportFailure("disk full")
        assert "disk full" in str(err)
