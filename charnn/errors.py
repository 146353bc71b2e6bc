class CharRNNError(Exception):
    """Base class for every error raised by charnn."""


class EmptyCorpusError(CharRNNError, ValueError):
    pass


class InvalidWindowParamsError(CharRNNError, ValueError):
    pass


class UnknownCharacterError(CharRNNError, ValueError):
    pass


class InvalidTemperatureError(CharRNNError, ValueError):
    pass


class InvalidProbabilityError(CharRNNError, ValueError):
    pass
