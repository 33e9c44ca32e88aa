__version__ = "1.0.0"
__description__ = "reshape : sort mapping, data shaping and HATEOAS links for Flask-SQLAlchemy APIs"
