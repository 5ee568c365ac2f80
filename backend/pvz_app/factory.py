"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from pvz_app.core.config import BaseConfig, get_config
from pvz_app.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config class, object or import path; ``None`` picks the
        class selected by ``APP_ENV``.
    :param instance_relative_config: Whether to load overrides from the
        instance folder.
    :param instance_config_filename: Name of the optional instance config file.
    :returns: A ready-to-serve Flask app.
    :rtype: flask.Flask
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    config_obj = get_config() if config is None else config
    validate = getattr(config_obj, "validate", None)
    if callable(validate):
        validate()
    app.config.from_object(config_obj)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from pvz_app.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from pvz_app.api import init_app as init_api

    init_api(app)

    from pvz_app.core import errors

    errors.init_app(app)

    return app
