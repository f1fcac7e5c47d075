# --- Menu ---
MENU_TITLE = "📊 *Training bot*\nChoose an action:"
USE_MENU = "Send /start to open the menu."

# --- Training flow ---
NEW_TRAINING = "Starting a new training. Enter the muscle group:"
PROMPT_DURATION = "Muscle group saved. Now enter the duration (in hours, e.g. 1.5):"
PROMPT_WEIGHT = "Duration saved. Now enter the weight (kg) or 'No':"
SAVE_SUCCESS = "✅ Training saved!\n{total_time}"

# --- Errors ---
ERROR_INVALID_DURATION = "Error: enter a number, e.g. 1.5"
ERROR_INVALID_WEIGHT = "Error: enter a number or 'No'"

# --- Reports ---
TOTAL_TIME_EMPTY = "Total training time: 0 hours."
TOTAL_TIME_HOURS = "Total training time: {value:.2f} hours."
TOTAL_TIME_DAYS = "Total training time: {value:.2f} days."
TOTAL_TIME_MONTHS = "Total training time: {value:.2f} months."
AVERAGE_TIME = "Average training time: {value:.2f} hours."
AVERAGE_TIME_EMPTY = "📈 No trainings recorded yet."
TOTAL_WEIGHT = "⚖️ Total weight across all trainings: {value:.1f} kg"
TOTAL_WEIGHT_EMPTY = "⚖️ Weight was not recorded in any training."
LAST_TRAINING_EMPTY = "📅 No data about the last training."
LAST_TRAINING = (
    "📅 *Last training*\n"
    "Muscle group: {muscle_group}\n"
    "Duration: {duration}\n"
    "Weight: {weight}"
)
WEIGHT_KG = "{value} kg"
WEIGHT_NOT_SPECIFIED = "not specified"

# --- Duration labels ---
DURATION_MINUTES = "{value:.0f} minutes"
DURATION_HOURS = "{value:.2f} hours"
DURATION_DAYS = "{value:.2f} days"
