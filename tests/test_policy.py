from excel_interviewer.interview import AdvancementPolicy, EvaluationResult


def result(score, passed):
    return EvaluationResult(score=score, passed=passed, feedback="")


def test_advances_on_pass():
    policy = AdvancementPolicy()
    assert policy.should_advance(result(75, True), attempt=1)


def test_stays_on_failure_below_attempt_cap():
    policy = AdvancementPolicy()
    assert not policy.should_advance(result(40, False), attempt=1)
    assert not policy.should_advance(result(40, False), attempt=2)


def test_forces_advance_at_attempt_cap():
    policy = AdvancementPolicy()
    assert policy.should_advance(result(40, False), attempt=3)


def test_threshold_score_counts_as_pass():
    policy = AdvancementPolicy(pass_threshold=60)
    assert policy.is_passing(result(60, False))
    assert not policy.is_passing(result(59, False))


def test_custom_attempt_cap():
    policy = AdvancementPolicy(max_attempts=1)
    assert policy.attempts_exhausted(1)
    assert policy.should_advance(result(10, False), attempt=1)
