"""편집기 단계(Stepper) 상태 머신

personal -> summary -> experience -> education -> skills -> certifications -> projects -> preview
앞/뒤 이동과 임의 단계 점프를 지원한다. 완료 여부는 표시용이며 이동을 막지 않는다.
"""

from app.domain.resume.completion import step_statuses
from app.domain.resume.constants import WIZARD_STEPS, WizardStep
from app.domain.resume.schemas import ResumeData


class Wizard:
    def __init__(self, start: WizardStep | str = WizardStep.PERSONAL):
        self._index = self._index_of(start)

    @staticmethod
    def _index_of(step: WizardStep | str) -> int:
        try:
            return WIZARD_STEPS.index(WizardStep(step))
        except ValueError:
            raise ValueError(f"알 수 없는 단계: {step}") from None

    @property
    def current(self) -> WizardStep:
        return WIZARD_STEPS[self._index]

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == len(WIZARD_STEPS) - 1

    @property
    def progress(self) -> int:
        """단계 위치 기준 진행률 (0-100)"""
        return round(self._index / (len(WIZARD_STEPS) - 1) * 100)

    def next(self) -> WizardStep:
        if not self.is_last:
            self._index += 1
        return self.current

    def back(self) -> WizardStep:
        if not self.is_first:
            self._index -= 1
        return self.current

    def jump(self, step: WizardStep | str) -> WizardStep:
        self._index = self._index_of(step)
        return self.current

    def statuses(self, draft: ResumeData) -> dict[WizardStep, str]:
        return step_statuses(draft)
