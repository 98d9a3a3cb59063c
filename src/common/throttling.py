from ninja_extra.throttling import AnonRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "60/min"


class UserDefaultThrottle(UserRateThrottle):
    rate = "100/min"


class AuthThrottle(AnonRateThrottle):
    rate = "20/min"


class WriteThrottle(UserRateThrottle):
    rate = "100/min"


class PublicSubmissionThrottle(AnonRateThrottle):
    rate = "30/hour"


class VerificationCodeThrottle(AnonRateThrottle):
    rate = "10/hour"


class UnsplashThrottle(AnonRateThrottle):
    rate = "50/hour"


class MediaValidationThrottle(AnonRateThrottle):
    rate = "1000/min"
