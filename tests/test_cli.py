"""
Tests for the command line interface.
"""

import json

from cdk_template.cli import EXIT_INVALID_CONFIG, EXIT_INVALID_ENV, main


class TestCli:
    """Tests for cdk-template commands."""

    def test_envs(self, capsys):
        """Test listing environment names."""
        assert main(["envs"]) == 0

        assert capsys.readouterr().out.split() == ["dev", "stg", "prd"]

    def test_check_ok(self, clean_environ, env_file, capsys):
        """Test a valid configuration passes the check."""
        assert main(["check", "--env", "dev", "--env-file", str(env_file)]) == 0

        assert "OK" in capsys.readouterr().out.splitlines()

    def test_invalid_environment(self, clean_environ, env_file, capsys):
        """Test an unknown environment exits non-zero with a message."""
        code = main(["check", "--env", "staging", "--env-file", str(env_file)])

        assert code == EXIT_INVALID_ENV
        assert "Invalid environment name 'staging'" in capsys.readouterr().err

    def test_missing_key(self, clean_environ, tmp_path, capsys):
        """Test missing keys are all listed on stderr."""
        path = tmp_path / ".env"
        path.write_text("BEDROCK_MODEL_ID=model\n", encoding="utf-8")

        code = main(["check", "--env", "dev", "--env-file", str(path)])

        err = capsys.readouterr().err
        assert code == EXIT_INVALID_CONFIG
        assert "API_KEY" in err
        assert "AWS_ACCOUNT_ID" in err

    def test_show_json_masks_secrets(self, clean_environ, env_file, capsys):
        """Test JSON output hides the API key by default."""
        code = main(["show", "--env", "stg", "--env-file", str(env_file), "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["prefix"] == "stg"
        assert data["cost"] == "cdk-template-stg"
        assert data["dotEnv"]["API_KEY"] == "****"
        assert data["diffEnv"] == {}

    def test_show_secrets(self, clean_environ, env_file, capsys):
        """Test --show-secrets prints the real value."""
        main([
            "show", "--env", "dev", "--env-file", str(env_file),
            "--format", "json", "--show-secrets",
        ])

        data = json.loads(capsys.readouterr().out)
        assert data["dotEnv"]["API_KEY"] == "test-api-key"

    def test_show_pretty(self, clean_environ, env_file, capsys):
        """Test the pretty format."""
        assert main(["show", "--env", "prd", "--env-file", str(env_file)]) == 0

        out = capsys.readouterr().out
        assert "Parameters for prd" in out
        assert "region: ap-northeast-1" in out
        assert "API_KEY=****" in out
        assert "(none)" in out

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == EXIT_INVALID_CONFIG
        assert "usage" in capsys.readouterr().out

    def test_invalid_setting(self, monkeypatch, capsys):
        """Test a bad CDK_TEMPLATE_* value exits with a message, not a traceback."""
        from cdk_template.config import get_settings

        monkeypatch.setenv("CDK_TEMPLATE_LOG_LEVEL", "LOUD")
        get_settings.cache_clear()
        try:
            code = main(["envs"])
        finally:
            get_settings.cache_clear()

        err = capsys.readouterr().err
        assert code == EXIT_INVALID_CONFIG
        assert "error: invalid CDK_TEMPLATE_* setting" in err
        assert "LOUD" in err
