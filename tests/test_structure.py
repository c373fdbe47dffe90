"""
Test basic project structure and imports
"""
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_project_structure():
    """Test that all required directories and files exist"""

    # Check main directories
    assert (ROOT / "complaint_register").is_dir(), "complaint_register package should exist"
    assert (ROOT / "tests").is_dir(), "tests directory should exist"

    # Check package subdirectories
    for sub in ("models", "routes", "services", "templates"):
        assert (ROOT / "complaint_register" / sub).is_dir(), f"complaint_register/{sub} should exist"

    # Check key files
    for name in ("main.py", "config.py", "logging_config.py", "database.py", "exceptions.py"):
        assert (ROOT / "complaint_register" / name).exists(), f"complaint_register/{name} should exist"
    assert (ROOT / "pyproject.toml").exists(), "pyproject.toml should exist"
    assert (ROOT / ".env.example").exists(), ".env.example should exist"


def test_templates_present():
    """Every page rendered by the routes has a template"""
    templates = ROOT / "complaint_register" / "templates"
    for name in ("base.html", "index.html", "edit.html", "replacement-report.html", "import-report.html"):
        assert (templates / name).exists(), f"{name} should exist"


def test_dependencies_declared():
    """Test that pyproject.toml declares the runtime stack"""
    content = (ROOT / "pyproject.toml").read_text()

    assert "fastapi" in content, "FastAPI should be a dependency"
    assert "uvicorn" in content, "Uvicorn should be a dependency"
    assert "sqlmodel" in content, "SQLModel should be a dependency"
    assert "aiosqlite" in content, "aiosqlite should be a dependency"
    assert "pydantic-settings" in content, "pydantic-settings should be a dependency"
    assert "python-dotenv" in content, "python-dotenv should be a dependency"
    assert "python-json-logger" in content, "python-json-logger should be a dependency"
    assert "openpyxl" in content, "openpyxl should be a dependency"
    assert "python-multipart" in content, "python-multipart should be a dependency"
    assert "pytest-asyncio" in content, "pytest-asyncio should be a test dependency"


def test_imports():
    """Test that the application modules import cleanly"""
    from complaint_register.main import app
    from complaint_register.services import ComplaintStore, ImportReconciler, RecordMapper, SerialAllocator

    assert app.title == "Complaint Register"
    paths = set(app.openapi()["paths"])
    for path in ("/", "/add", "/save", "/edit/{serial}", "/delete/{serial}", "/upload-excel",
                 "/download-sample-excel", "/export-excel", "/replacement-report",
                 "/update-replacement/{serial}", "/health"):
        assert path in paths, f"{path} should be routed"
    assert all([ComplaintStore, ImportReconciler, RecordMapper, SerialAllocator])
