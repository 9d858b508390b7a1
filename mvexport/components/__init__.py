"""
System components for mvexport.
"""

from mvexport.components.config import Config, ConfigManager
