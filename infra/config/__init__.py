from .filesystem_config_provider import ConfigFileError, FileSystemConfigProvider

__all__ = ["ConfigFileError", "FileSystemConfigProvider"]
