import pytest

from spice2json.core.errors import (
    ClassificationError,
    SchemaExportError,
    SchemaInputError,
    Spice2JsonError,
    get_exit_code,
)


class TestErrors:
    @pytest.mark.anyio
    async def test_message_and_details(self):
        error = ClassificationError("bad relation", details={"relation": "x"})

        assert str(error) == "bad relation"
        assert error.message == "bad relation"
        assert error.details == {"relation": "x"}

    @pytest.mark.anyio
    async def test_details_default_to_empty(self):
        assert SchemaInputError("bad input").details == {}

    @pytest.mark.anyio
    async def test_hierarchy(self):
        for error_class in (ClassificationError, SchemaExportError, SchemaInputError):
            assert issubclass(error_class, Spice2JsonError)


class TestExitCodes:
    @pytest.mark.anyio
    async def test_mapped_codes(self):
        assert get_exit_code(SchemaInputError("x")) == 2
        assert get_exit_code(SchemaExportError("x")) == 1
        assert get_exit_code(ClassificationError("x")) == 1

    @pytest.mark.anyio
    async def test_unknown_error_defaults_to_one(self):
        assert get_exit_code(RuntimeError("x")) == 1
