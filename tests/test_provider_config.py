from dreamclient.llm import provider_config
from dreamclient.llm.provider_config import load_key


def test_load_key_prefers_environment(monkeypatch, tmp_path):
    key_file = tmp_path / "openai.key"
    key_file.write_text("sk-from-file\n")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

    assert load_key(str(key_file)) == "sk-from-env"


def test_load_key_reads_file(monkeypatch, tmp_path):
    key_file = tmp_path / "openai.key"
    key_file.write_text("  sk-from-file\n")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert load_key(str(key_file)) == "sk-from-file"


def test_load_key_missing(monkeypatch, tmp_path):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert load_key(str(tmp_path / "openai.key")) is None
    assert load_key(None) is None


def test_endpoints_derive_from_base_url():
    assert provider_config.COMPLETIONS_URL == f"{provider_config.BASE_URL}/chat/completions"
    assert provider_config.IMAGES_URL == f"{provider_config.BASE_URL}/images/generations"
