from langgraph.graph import StateGraph, END

from models.chat_state import ChatState
from nodes.candidates_node import candidates_node
from nodes.recommend_node import recommend_node
from nodes.resolve_node import resolve_node


def create_chatbot_workflow():
    """Compile and return the LangGraph workflow for one chatbot turn."""

    sg = StateGraph(ChatState)

    sg.add_node("candidates", candidates_node)
    sg.add_node("recommend", recommend_node)
    sg.add_node("resolve", resolve_node)

    # Flow: candidates -> recommend -> resolve -> END
    sg.set_entry_point("candidates")
    sg.add_edge("candidates", "recommend")
    sg.add_edge("recommend", "resolve")
    sg.add_edge("resolve", END)

    return sg.compile()


# singleton compiled workflow
chatbot_workflow = create_chatbot_workflow()
