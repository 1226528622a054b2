"""Tests for block, dashboard and client config validation."""

import pytest

from lark_dashboard.client import ClientConfig
from lark_dashboard.types import (
    AggregationType, BlockType, ChartAxis, ChartConfig, ChartType, Dashboard, DashboardBlock,
    DataSource, LayoutColumn, LayoutConfig, TextConfig, TextElement, ViewConfig, ViewType,
)
from lark_dashboard.validation import (
    ValidationError, ValidationResult, validate_app_token, validate_block,
    validate_block_config, validate_client_config, validate_dashboard, validate_field_name,
    validate_table_id,
)

DS = DataSource("app1", "tbl1")


class TestValidateBlock:
    """Whole-block checks before dispatching to the per-kind rules."""

    def test_valid_block(self):
        block = DashboardBlock(BlockType.VIEW, ViewConfig(ViewType.GRID, DS))
        validate_block(block)

    def test_not_a_block(self):
        with pytest.raises(ValidationError, match="Invalid block configuration"):
            validate_block({"block_type": 1})

    def test_bad_block_type(self):
        with pytest.raises(ValidationError, match="Invalid or missing block type"):
            validate_block(DashboardBlock(42, ViewConfig(ViewType.GRID, DS)))

    def test_missing_config(self):
        with pytest.raises(ValidationError, match="Block configuration is required"):
            validate_block(DashboardBlock(BlockType.TEXT, None))

    def test_config_variant_mismatch(self):
        with pytest.raises(ValidationError, match="expects ChartConfig, got ViewConfig"):
            validate_block(DashboardBlock(BlockType.CHART, ViewConfig(ViewType.GRID, DS)))

    @pytest.mark.parametrize("block_type", [BlockType.FILTER, BlockType.CALENDAR,
                                            BlockType.TIMELINE])
    def test_reserved_types_rejected(self, block_type):
        with pytest.raises(ValidationError, match="Unknown block type"):
            validate_block_config(block_type, TextConfig(elements=(TextElement("x"),)))

    def test_integer_block_type_dispatches(self):
        validate_block_config(4, LayoutConfig(columns=(LayoutColumn(12),)))

    def test_raw_values_accepted_in_config(self):
        config = ChartConfig(chart_type=2, data_source=DS, x_axis=None, y_axis=())
        with pytest.raises(ValidationError, match="X-axis"):
            validate_block_config(BlockType.CHART, config)

    def test_aggregation_value_string_accepted(self):
        config = ChartConfig(ChartType.BAR, DS, ChartAxis("x"), (ChartAxis("y", "Sum"),))
        validate_block_config(BlockType.CHART, config)
        assert AggregationType("Sum") == AggregationType.SUM


class TestValidateDashboard:

    def test_valid(self):
        validate_dashboard(Dashboard("Sales", "app1"))

    def test_missing_name(self):
        with pytest.raises(ValidationError, match="Dashboard name is required"):
            validate_dashboard(Dashboard("", "app1"))

    def test_missing_app_token(self):
        with pytest.raises(ValidationError, match="App token is required"):
            validate_dashboard(Dashboard("Sales", ""))

    def test_not_a_dashboard(self):
        with pytest.raises(ValidationError, match="Invalid dashboard configuration"):
            validate_dashboard(None)


class TestValidateClientConfig:

    def test_defaults_valid(self):
        validate_client_config(ClientConfig(api_key="t-123"))

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_api_key_required(self, api_key):
        with pytest.raises(ValidationError, match="API key is required"):
            validate_client_config(ClientConfig(api_key=api_key))

    @pytest.mark.parametrize("kwargs,message", [
        ({"timeout": -1}, "Timeout"),
        ({"max_retries": -1}, "Max retries"),
        ({"retry_delay": -0.5}, "Retry delay"),
        ({"region": "eu"}, "Region must be one of: sg, cn, us"),
    ])
    def test_bad_values(self, kwargs, message):
        with pytest.raises(ValidationError, match=message):
            validate_client_config(ClientConfig(api_key="t-123", **kwargs))

    @pytest.mark.parametrize("kwargs,message", [
        ({"timeout": None}, "Timeout"),
        ({"max_retries": None}, "Max retries"),
        ({"max_retries": 1.5}, "Max retries"),
        ({"retry_delay": None}, "Retry delay"),
        ({"retry_delay": "1"}, "Retry delay"),
    ])
    def test_missing_or_wrong_type_values(self, kwargs, message):
        with pytest.raises(ValidationError, match=message):
            validate_client_config(ClientConfig(api_key="t-123", **kwargs))


class TestIdentifierChecks:

    @pytest.mark.parametrize("fn,message", [
        (validate_field_name, "Field name cannot be empty"),
        (validate_app_token, "App token cannot be empty"),
        (validate_table_id, "Table ID cannot be empty"),
    ])
    def test_blank_rejected(self, fn, message):
        with pytest.raises(ValidationError, match=message):
            fn("  ")

    def test_non_blank_accepted(self):
        validate_field_name("Revenue")
        validate_app_token("bascn123")
        validate_table_id("tbl1")


class TestValidationResult:

    def test_raise_for_errors_joins_messages(self):
        result = ValidationResult(valid=False, errors=["a", "b"])
        with pytest.raises(ValidationError, match="a; b"):
            result.raise_for_errors()

    def test_valid_result_does_not_raise(self):
        ValidationResult(valid=True).raise_for_errors()

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)
