"""Tests for configuration parsing."""

import pytest

from credentials.config import Settings, load_settings
from credentials.errors import ConfigurationError


class TestLoadSettings:

    def test_minimal_environment_uses_defaults(self):
        settings = load_settings({"ENVIRONMENT": "development", "BUCKET_NAME": "test-bucket"})

        assert settings == Settings(environment="development", bucket_name="test-bucket")
        assert settings.region == "us-east-1"
        assert settings.max_workers == 8
        assert settings.parameter_type == "String"

    def test_reads_optional_variables(self):
        settings = load_settings({
            "ENVIRONMENT": "production",
            "BUCKET_NAME": "prod-credentials",
            "AWS_REGION": "eu-west-1",
            "LOG_LEVEL": "debug",
            "MAX_WORKERS": "2",
            "SECRET_PARAMETER_TYPE": "SecureString",
        })

        assert settings.region == "eu-west-1"
        assert settings.log_level == "DEBUG"
        assert settings.max_workers == 2
        assert settings.parameter_type == "SecureString"

    @pytest.mark.parametrize("environ,variable", [
        ({"BUCKET_NAME": "b"}, "ENVIRONMENT"),
        ({"ENVIRONMENT": "staging", "BUCKET_NAME": "b"}, "ENVIRONMENT"),
        ({"ENVIRONMENT": "development"}, "BUCKET_NAME"),
        ({"ENVIRONMENT": "development", "BUCKET_NAME": "  "}, "BUCKET_NAME"),
        ({"ENVIRONMENT": "development", "BUCKET_NAME": "b", "LOG_LEVEL": "LOUD"}, "LOG_LEVEL"),
        ({"ENVIRONMENT": "development", "BUCKET_NAME": "b", "MAX_WORKERS": "many"}, "MAX_WORKERS"),
        ({"ENVIRONMENT": "development", "BUCKET_NAME": "b", "MAX_WORKERS": "0"}, "MAX_WORKERS"),
        ({"ENVIRONMENT": "development", "BUCKET_NAME": "b", "SECRET_PARAMETER_TYPE": "StringList"},
         "SECRET_PARAMETER_TYPE"),
    ])
    def test_invalid_values_name_the_variable(self, environ, variable):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(environ)

        assert exc_info.value.variable == variable
