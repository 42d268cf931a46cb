from enum import Enum, auto


class FormPhase(Enum):
    '''States of the FORM container while reading'''
    EXPECT_FORM_HEADER = 0
    EXPECT_FORM_TYPE   = auto()
    WALKING            = auto()
    DECRYPTING         = auto()
    DONE               = auto()
    INVALID            = auto()
