from importlib.metadata import version
import pepcraft


def test_version():
    """
    Check if the version of the package is the installed version.
    """
    assert pepcraft.__version__ == version("pepcraft")
