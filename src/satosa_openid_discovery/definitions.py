SESSION_KEY_PREFIX = 'satosa_openid_discovery.CandidateList::'
DEFAULT_SESSION_KEY_SUFFIX = 'auth'
SERIALIZED_TYPE_TAG = 'candidate_list'
