class AIFCDecryptException(Exception):
    '''Base class to extend in order to throw exception in aifcdecrypt.

    It takes a message and optionally the chain of the fields that
    caused the exception, innermost first.
    '''

    def __init__(self, message='', chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        message = super().__str__()
        if not self.chain:
            return message

        return '%s (at %s)' % (message, '.'.join(self.chain[::-1]))


class NotAnAIFCFile(AIFCDecryptException):
    pass


class UnsupportedFormType(AIFCDecryptException):
    pass


class ChunkBoundsViolation(AIFCDecryptException):
    '''A sub-chunk has negative size or ends past its parent.'''
    pass


class MalformedChunk(AIFCDecryptException):
    '''The declared size doesn't match the layout of the chunk.'''
    pass


class UnsupportedCompression(AIFCDecryptException):
    pass


class TruncatedRead(AIFCDecryptException):
    pass


class MissingChunk(AIFCDecryptException):
    '''This is raised when a chunk needed to finish the processing is absent.'''
    pass
