from telebotkit.poll import Poll, PollAnswer, PollOption, PollType


def test_poll_kinds():
    assert Poll(type=PollType.REGULAR).is_regular()
    assert Poll(type=PollType.QUIZ).is_quiz()
    assert not Poll(type=PollType.QUIZ).is_regular()
    assert not Poll().is_quiz()


def test_add_options():
    p = Poll()
    opts = [PollOption(text="Option 1"), PollOption(text="Option 2")]
    p.add_options(opts[0].text, opts[1].text)
    assert p.options == opts


def test_poll_type_marshals_as_object():
    assert PollType.QUIZ.to_dict() == {"type": "quiz"}


def test_poll_from_dict():
    p = Poll.from_dict(
        {
            "id": "p1",
            "type": "quiz",
            "question": "Test Poll",
            "options": [{"text": "1", "voter_count": 3}, {"text": "2"}],
            "total_voter_count": 3,
            "is_anonymous": True,
            "close_date": 1_700_000_060,
        }
    )
    assert p.is_quiz()
    assert p.question == "Test Poll"
    assert p.options == [PollOption(text="1", voter_count=3), PollOption(text="2")]
    assert p.voter_count == 3
    assert p.anonymous is True
    assert p.close_date().timestamp() == 1_700_000_060


def test_poll_answer_from_dict():
    answer = PollAnswer.from_dict({"poll_id": "p1", "user": {"id": 7}, "option_ids": [0, 2]})
    assert answer.poll_id == "p1"
    assert answer.sender == {"id": 7}
    assert answer.options == [0, 2]