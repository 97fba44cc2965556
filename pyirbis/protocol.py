"""Constants for the message protocol with the IRBIS64 server.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

# pylint: disable=bad-whitespace

IRBIS_PORT                        = 6666
DEFAULT_DATABASE                  = 'IBIS'

# Workstation (ARM) codes
ADMINISTRATOR                     = 'A'
CATALOGER                         = 'C'
ACQUISITIONS                      = 'M'
READER                            = 'R'
CIRCULATION                       = 'B'
BOOKLAND                          = 'B'
PROVISION                         = 'K'

WORKSTATIONS = {ADMINISTRATOR, CATALOGER, ACQUISITIONS, READER,
                CIRCULATION, PROVISION}

# Protocol Messages
REGISTER_CLIENT                   = 'A'
UNREGISTER_CLIENT                 = 'B'
READ_RECORD                       = 'C'
UPDATE_RECORD                     = 'D'
ACTUALIZE_RECORD                  = 'F'
FORMAT_RECORD                     = 'G'
READ_TERMS                        = 'H'
READ_POSTINGS                     = 'I'
SEARCH                            = 'K'
NOP                               = 'N'
GET_MAX_MFN                       = 'O'
READ_TERMS_REVERSE                = 'P'
UNLOCK_RECORDS                    = 'Q'
EMPTY_DATABASE                    = 'S'
CREATE_DATABASE                   = 'T'
UNLOCK_DATABASE                   = 'U'
DELETE_DATABASE                   = 'W'
CREATE_DICTIONARY                 = 'Z'
LIST_FILES                        = '!'

# Record status flags
LOGICALLY_DELETED                 = 1
PHYSICALLY_DELETED                = 2
ABSENT                            = 4
NON_ACTUALIZED                    = 8
LAST_VERSION                      = 32
LOCKED_RECORD                     = 64

DELETED_MASK                      = LOGICALLY_DELETED | PHYSICALLY_DELETED

# Standard formats
ALL_FORMAT                        = "&uf('+0')"
BRIEF_FORMAT                      = '@brief'
IBIS_FORMAT                       = '@ibiskw_h'
INFO_FORMAT                       = '@info_w'
OPTIMIZED_FORMAT                  = '@'

# Common search prefixes
KEYWORD_PREFIX                    = 'K='
AUTHOR_PREFIX                     = 'A='
COLLECTIVE_PREFIX                 = 'M='
TITLE_PREFIX                      = 'T='
INVENTORY_PREFIX                  = 'IN='
INDEX_PREFIX                      = 'I='

# Line group delimiters
IRBIS_DELIMITER                   = '\x1F\x1E'
SHORT_DELIMITER                   = '\x1E'

# Number of reserved lines in the request and response headers
REQUEST_RESERVED_LINES            = 3
RESPONSE_RESERVED_LINES           = 5

# Error code values
MFN_OUT_OF_RANGE                  = -100
BAD_SHELF_SIZE                    = -101
BAD_SHELF_NUMBER                  = -102
MFN_OUT_OF_BOUNDS                 = -140
READ_ERROR                        = -141
FIELD_ABSENT                      = -200
PREVIOUS_VERSION_ABSENT           = -201
TERM_NOT_FOUND                    = -202
LAST_TERM                         = -203
FIRST_TERM                        = -204
DATABASE_LOCKED                   = -300
DATABASE_LOCKED_EXCLUSIVE         = -301
MST_XRF_ERROR                     = -400
IFP_ERROR                         = -401
WRITE_ERROR                       = -402
ACTUALIZATION_ERROR               = -403
RECORD_LOGICALLY_DELETED          = -600
RECORD_PHYSICALLY_DELETED         = -601
RECORD_LOCKED                     = -602
RECORD_DELETED                    = -603
RECORD_DELETED_PHYSICALLY         = -605
AUTOIN_ERROR                      = -607
RECORD_VERSION_ERROR              = -608
BACKUP_ERROR                      = -700
RESTORE_ERROR                     = -701
SORT_ERROR                        = -702
BAD_TERM                          = -703
DICTIONARY_CREATE_ERROR           = -704
DICTIONARY_LOAD_ERROR             = -705
GBL_PARAMETERS_ERROR              = -800
GBL_REP_ERROR                     = -801
GBL_MET_ERROR                     = -802
SERVER_EXECUTE_ERROR              = -1111
WRONG_PROTOCOL                    = -2222
CLIENT_NOT_IN_LIST                = -3333
CLIENT_NOT_IN_USE                 = -3334
CLIENT_IDENTIFIER_WRONG           = -3335
CLIENT_LIST_OVERLOAD              = -3336
CLIENT_ALREADY_EXISTS             = -3337
CLIENT_NOT_ALLOWED                = -3338
WRONG_PASSWORD                    = -4444
FILE_NOT_EXISTS                   = -5555
SERVER_OVERLOAD                   = -6666
PROCESS_ERROR                     = -7777
GLOBAL_ERROR                      = -8888


# Negative codes that still carry a usable answer for a given command
READ_RECORD_CODES = (PREVIOUS_VERSION_ABSENT, RECORD_LOGICALLY_DELETED,
                     RECORD_LOCKED, RECORD_DELETED)

READ_TERMS_CODES = (TERM_NOT_FOUND, LAST_TERM, FIRST_TERM)

# Status bits implied by an acceptable read_record code
READ_RECORD_STATUS = {RECORD_LOGICALLY_DELETED: LOGICALLY_DELETED,
                      RECORD_DELETED: LOGICALLY_DELETED,
                      RECORD_LOCKED: LOCKED_RECORD}


DATA_ERRORS = {MFN_OUT_OF_RANGE,
               MFN_OUT_OF_BOUNDS,
               READ_ERROR,
               FIELD_ABSENT,
               PREVIOUS_VERSION_ABSENT,
               TERM_NOT_FOUND,
               LAST_TERM,
               FIRST_TERM,
               RECORD_LOGICALLY_DELETED,
               RECORD_PHYSICALLY_DELETED,
               RECORD_DELETED,
               RECORD_DELETED_PHYSICALLY,
               RECORD_VERSION_ERROR,
               BAD_TERM}

OPERATIONAL_ERRORS = {BAD_SHELF_SIZE,
                      BAD_SHELF_NUMBER,
                      DATABASE_LOCKED,
                      DATABASE_LOCKED_EXCLUSIVE,
                      MST_XRF_ERROR,
                      IFP_ERROR,
                      WRITE_ERROR,
                      ACTUALIZATION_ERROR,
                      RECORD_LOCKED,
                      AUTOIN_ERROR,
                      BACKUP_ERROR,
                      RESTORE_ERROR,
                      SORT_ERROR,
                      DICTIONARY_CREATE_ERROR,
                      DICTIONARY_LOAD_ERROR,
                      FILE_NOT_EXISTS,
                      SERVER_OVERLOAD,
                      PROCESS_ERROR}

INTERNAL_ERRORS = {SERVER_EXECUTE_ERROR,
                   GLOBAL_ERROR}

INTEGRITY_ERRORS = {CLIENT_ALREADY_EXISTS}

PROGRAMMING_ERRORS = {GBL_PARAMETERS_ERROR,
                      GBL_REP_ERROR,
                      GBL_MET_ERROR,
                      WRONG_PROTOCOL,
                      CLIENT_NOT_IN_LIST,
                      CLIENT_NOT_IN_USE,
                      CLIENT_IDENTIFIER_WRONG,
                      CLIENT_LIST_OVERLOAD,
                      CLIENT_NOT_ALLOWED,
                      WRONG_PASSWORD}


NO_ERROR = 'No error'
UNKNOWN_ERROR = 'Unknown error'

errorDescriptions = {
    MFN_OUT_OF_RANGE: 'Requested MFN is outside the database',
    BAD_SHELF_SIZE: 'Wrong shelf size',
    BAD_SHELF_NUMBER: 'Wrong shelf number',
    MFN_OUT_OF_BOUNDS: 'MFN is outside the database',
    READ_ERROR: 'Read error',
    FIELD_ABSENT: 'Requested field is absent',
    PREVIOUS_VERSION_ABSENT: 'Previous version of the record is absent',
    TERM_NOT_FOUND: 'Requested term not found (term does not exist)',
    LAST_TERM: 'Last term in the list',
    FIRST_TERM: 'First term in the list',
    DATABASE_LOCKED: 'Database is locked exclusively',
    DATABASE_LOCKED_EXCLUSIVE: 'Database is locked exclusively',
    MST_XRF_ERROR: 'Error opening MST or XRF files (data file error)',
    IFP_ERROR: 'Error opening IFP files (index file error)',
    WRITE_ERROR: 'Write error',
    ACTUALIZATION_ERROR: 'Actualization error',
    RECORD_LOGICALLY_DELETED: 'Record is logically deleted',
    RECORD_PHYSICALLY_DELETED: 'Record is physically deleted',
    RECORD_LOCKED: 'Record is locked for input',
    RECORD_DELETED: 'Record is logically deleted',
    RECORD_DELETED_PHYSICALLY: 'Record is physically deleted',
    AUTOIN_ERROR: 'autoin.gbl error',
    RECORD_VERSION_ERROR: 'Record version error',
    BACKUP_ERROR: 'Error creating backup copy',
    RESTORE_ERROR: 'Error restoring from backup copy',
    SORT_ERROR: 'Sort error',
    BAD_TERM: 'Malformed term',
    DICTIONARY_CREATE_ERROR: 'Error creating dictionary',
    DICTIONARY_LOAD_ERROR: 'Error loading dictionary',
    GBL_PARAMETERS_ERROR: 'Error in global correction parameters',
    GBL_REP_ERROR: 'ERR_GBL_REP',
    GBL_MET_ERROR: 'ERR_GBL_MET',
    SERVER_EXECUTE_ERROR: 'Server execution error (SERVER_EXECUTE_ERROR)',
    WRONG_PROTOCOL: 'Protocol error (WRONG_PROTOCOL)',
    CLIENT_NOT_IN_LIST: 'Unregistered client (client not in the list)',
    CLIENT_NOT_IN_USE: 'Client is not logged in (client not in use)',
    CLIENT_IDENTIFIER_WRONG: 'Wrong unique client identifier',
    CLIENT_LIST_OVERLOAD: 'No access to workstation commands',
    CLIENT_ALREADY_EXISTS: 'Client is already registered',
    CLIENT_NOT_ALLOWED: 'Client is not allowed',
    WRONG_PASSWORD: 'Wrong password',
    FILE_NOT_EXISTS: 'File does not exist',
    SERVER_OVERLOAD: 'Server overloaded: maximum number of worker threads reached',
    PROCESS_ERROR: 'Failed to start or stop administrator thread (process error)',
    GLOBAL_ERROR: 'General error',
}


def describe_error(code):
    # type: (int) -> str
    """Return a human readable description of a server return code."""
    if code >= 0:
        return NO_ERROR
    return errorDescriptions.get(code, UNKNOWN_ERROR)
