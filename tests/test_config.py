"""Tests for config file parsing."""

from datetime import timezone

from studyhub.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.default_range == "weekly"
        assert config.events_per_day == 2

    def test_parses_values(self, tmp_path):
        config_file = tmp_path / "studyhub.conf"
        config_file.write_text(
            "# StudyHub settings\n"
            "\n"
            "SUPABASE_URL=https://project.supabase.co/\n"
            'SUPABASE_KEY="anon-key" # public anon key\n'
            "USER_ID=u1  # me\n"
            "TIMEZONE='Asia/Jakarta'\n"
            "DEFAULT_RANGE=Monthly\n"
            "EVENTS_PER_DAY=3\n"
            "DATA_FILE=~/studyhub/records.json\n"
            "not a setting\n"
        )
        config = load_config(config_file)
        assert config.supabase_url == "https://project.supabase.co"
        assert config.supabase_key == "anon-key"
        assert config.user_id == "u1"
        assert config.timezone == "Asia/Jakarta"
        assert config.default_range == "monthly"
        assert config.events_per_day == 3
        assert config.data_file == "~/studyhub/records.json"

    def test_invalid_number_keeps_default(self, tmp_path, caplog):
        config_file = tmp_path / "studyhub.conf"
        config_file.write_text("EVENTS_PER_DAY=lots\n")
        config = load_config(config_file)
        assert config.events_per_day == 2
        assert "EVENTS_PER_DAY" in caplog.text

    def test_unterminated_quote(self, tmp_path):
        config_file = tmp_path / "studyhub.conf"
        config_file.write_text('USER_ID="u1\n')
        assert load_config(config_file).user_id == "u1"


class TestConfigTz:
    def test_unknown_timezone_falls_back_to_utc(self, caplog):
        assert Config(timezone="Not/AZone").tz() is timezone.utc
        assert "Unknown timezone" in caplog.text
