"""Fixed supervisory sample set for the trainable scorer."""

from thinklink.domain.task import Priority, TaskType
from thinklink.domain.training import ExpectedOutput, TrainingSample


def _sample(text: str, priority: str, category: str, task_type: str) -> TrainingSample:
    return TrainingSample(
        input=text,
        expected_output=ExpectedOutput(priority=Priority(priority), category=category, type=TaskType(task_type)),
    )


TRAINING_SAMPLES: tuple[TrainingSample, ...] = (
    _sample("Create an urgent meeting with the marketing team tomorrow", "high", "work", "event"),
    _sample("Add a low priority note about grocery shopping", "low", "shopping", "note"),
    _sample("Schedule a doctor's appointment next week", "medium", "health", "event"),
    _sample("Finish the finance report by Friday", "high", "finance", "task"),
    _sample("Organize a family dinner for Sunday", "medium", "family", "event"),
    _sample("Create a new project plan for the upcoming launch", "high", "project", "task"),
    _sample("Add a note to buy gym equipment", "low", "fitness", "note"),
    _sample("Set a reminder for the team meeting next Monday", "medium", "meeting", "event"),
    _sample("Update the work calendar with upcoming deadlines", "high", "calendar", "task"),
    _sample("Delete the old notes from last month's review", "low", "note", "task"),
    _sample("Schedule a dentist appointment for next week", "high", "health", "task"),
    _sample("Buy groceries for the week", "medium", "shopping", "task"),
    _sample("Submit quarterly financial report", "high", "finance", "task"),
    _sample("Plan weekend getaway with family", "medium", "travel", "event"),
    _sample("Review project proposal documents", "high", "work", "task"),
    _sample("Call mom on her birthday", "high", "family", "event"),
    _sample("Take vitamins daily", "medium", "health", "task"),
    _sample("Clean garage this weekend", "low", "home", "task"),
    _sample("Study for certification exam", "high", "study", "task"),
    _sample("Pay monthly utility bills", "high", "finance", "task"),
    _sample("Attend team building workshop", "medium", "work", "event"),
    _sample("Start daily meditation practice", "low", "personal", "task"),
    _sample("Research new project management tools", "medium", "work", "task"),
    _sample("Schedule annual car maintenance", "medium", "personal", "task"),
    _sample("Prepare presentation for client meeting", "high", "work", "task"),
    _sample("Order new office supplies", "low", "shopping", "task"),
    _sample("Update personal resume", "medium", "personal", "task"),
    _sample("Plan department budget for next quarter", "high", "finance", "task"),
    _sample("Schedule weekly team standup", "medium", "meeting", "event"),
    _sample("Buy birthday gift for spouse", "high", "personal", "task"),
    _sample("Set up home office equipment", "medium", "home", "task"),
    _sample("Review insurance policies", "medium", "finance", "task"),
    _sample("Start new workout routine", "medium", "fitness", "task"),
    _sample("Plan summer vacation", "low", "travel", "task"),
    _sample("Schedule annual health checkup", "high", "health", "task"),
    _sample("Organize digital files and folders", "low", "work", "task"),
    _sample("Research investment opportunities", "medium", "finance", "task"),
    _sample("Plan holiday party", "medium", "event", "event"),
    _sample("Schedule car wash", "low", "personal", "task"),
    _sample("Update emergency contact information", "high", "personal", "task"),
    _sample("Buy new running shoes", "low", "shopping", "task"),
    _sample("Schedule quarterly performance reviews", "high", "work", "task"),
    _sample("Plan weekly meal prep", "medium", "health", "task"),
    _sample("Set up automatic bill payments", "high", "finance", "task"),
    _sample("Organize family photo albums", "low", "personal", "task"),
    _sample("Schedule home repairs", "medium", "home", "task"),
    _sample("Review and update business plan", "high", "work", "task"),
    _sample("Plan weekly grocery list", "medium", "shopping", "task"),
    _sample("Schedule pet vaccination", "high", "personal", "task"),
    _sample("Research new phone plans", "low", "personal", "task"),
    _sample("Plan team building activities", "medium", "work", "event"),
    _sample("Schedule dental cleaning", "medium", "health", "task"),
    _sample("Update software licenses", "high", "work", "task"),
    _sample("Plan birthday celebration", "medium", "personal", "event"),
    _sample("Review retirement savings plan", "high", "finance", "task"),
    _sample("Schedule carpet cleaning", "low", "home", "task"),
    _sample("Create weekly status report", "high", "work", "task"),
    _sample("Plan weekend hiking trip", "low", "fitness", "event"),
    _sample("Schedule annual AC maintenance", "medium", "home", "task"),
    _sample("Update password manager", "high", "personal", "task"),
    _sample("Research new recipes for dinner", "low", "personal", "note"),
    _sample("Schedule oil change for car", "medium", "personal", "task"),
    _sample("Plan monthly budget review", "high", "finance", "task"),
    _sample("Set up new employee onboarding", "high", "work", "task"),
    _sample("Review quarterly sales report", "high", "work", "task"),
    _sample("Schedule dental cleaning", "medium", "health", "task"),
    _sample("Buy anniversary gift", "high", "personal", "task"),
    _sample("Clean out garage", "low", "home", "task"),
    _sample("Prepare tax documents", "high", "finance", "task"),
    _sample("Plan team building activity", "medium", "work", "event"),
    _sample("Update project timeline", "high", "work", "task"),
    _sample("Schedule haircut appointment", "low", "personal", "task"),
    _sample("Research vacation destinations", "low", "travel", "note"),
    _sample("Renew gym membership", "medium", "fitness", "task"),
    _sample("Submit expense reports", "high", "finance", "task"),
    _sample("Plan weekly meal prep", "medium", "personal", "task"),
    _sample("Back up computer files", "high", "personal", "task"),
    _sample("Schedule vet appointment for pet", "medium", "personal", "task"),
    _sample("Review investment portfolio", "high", "finance", "task"),
    _sample("Order new business cards", "low", "work", "task"),
    _sample("Plan holiday party", "medium", "social", "event"),
    _sample("Schedule home inspection", "high", "home", "task"),
    _sample("Buy new work attire", "medium", "shopping", "task"),
    _sample("Set up automatic bill payments", "high", "finance", "task"),
    _sample("Create presentation slides", "high", "work", "task"),
    _sample("Schedule car wash", "low", "personal", "task"),
    _sample("Plan birthday celebration", "medium", "social", "event"),
    _sample("Update emergency contacts", "high", "personal", "task"),
    _sample("Research new phone plans", "low", "personal", "note"),
    _sample("Schedule annual physical", "high", "health", "task"),
    _sample("Clean out email inbox", "medium", "work", "task"),
    _sample("Plan garden layout", "low", "home", "note"),
    _sample("Review insurance coverage", "high", "finance", "task"),
    _sample("Schedule carpet cleaning", "medium", "home", "task"),
    _sample("Buy new printer cartridges", "medium", "shopping", "task"),
    _sample("Plan retirement savings", "high", "finance", "task"),
    _sample("Schedule eye exam", "medium", "health", "task"),
    _sample("Update social media profiles", "low", "personal", "task"),
    _sample("Research new laptop options", "medium", "shopping", "note"),
    _sample("Plan networking event", "high", "work", "event"),
    _sample("Schedule HVAC maintenance", "medium", "home", "task"),
    _sample("Update contact list", "low", "personal", "task"),
    _sample("Research investment strategies", "high", "finance", "note"),
    _sample("Plan family reunion", "medium", "family", "event"),
    _sample("Schedule roof inspection", "high", "home", "task"),
    _sample("Buy new running shoes", "medium", "fitness", "task"),
    _sample("Plan charity fundraiser", "high", "work", "event"),
    _sample("Schedule pest control", "medium", "home", "task"),
    _sample("Research vacation packages", "low", "travel", "note"),
    _sample("Plan weekly team meeting", "high", "work", "event"),
    _sample("Buy new winter clothes", "medium", "shopping", "task"),
    _sample("Schedule blood work", "high", "health", "task"),
    _sample("Plan home renovation", "high", "home", "event"),
    _sample("Research retirement communities", "low", "personal", "note"),
    _sample("Schedule tire rotation", "medium", "personal", "task"),
    _sample("Plan product launch", "high", "work", "event"),
    _sample("Buy new bedding", "low", "shopping", "task"),
    _sample("Schedule chimney cleaning", "medium", "home", "task"),
    _sample("Research college savings plans", "high", "finance", "note"),
)
