import importlib

def test_main_entry_resolves():
    pkg = importlib.import_module("cdc_snapshot")
    assert pkg.__version__
    sub = importlib.import_module("cdc_snapshot.__main__")
    assert hasattr(sub, "main")
