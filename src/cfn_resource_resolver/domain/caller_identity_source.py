from abc import ABCMeta, abstractmethod


class CallerIdentitySource(metaclass=ABCMeta):
    @abstractmethod
    def get_caller_arn(self) -> str:
        pass
